"""tfctl: query, filter and render Terraform infrastructure metadata."""

from .attrs import Attr, AttrList, compile_attrs
from .errors import ConfigError, DocumentError, RenderError, TfctlError
from .filters import Filter, build_filters, filter_dataset
from .flatten import flatten_state
from .pipeline import QueryOptions, slice_dice_spit
from .sorting import SortKey, parse_sort_spec, sort_dataset

__all__ = [
    "Attr",
    "AttrList",
    "ConfigError",
    "DocumentError",
    "Filter",
    "QueryOptions",
    "RenderError",
    "SortKey",
    "TfctlError",
    "__version__",
    "build_filters",
    "compile_attrs",
    "filter_dataset",
    "flatten_state",
    "parse_sort_spec",
    "slice_dice_spit",
    "sort_dataset",
]

__version__ = "0.1.0"
