"""Exceptions raised by the query pipeline."""

from __future__ import annotations


class TfctlError(Exception):
    """Base error for everything tfctl raises on purpose."""


class DocumentError(TfctlError):
    """The raw document could not be parsed into a dataset."""


class RenderError(TfctlError):
    """The filtered dataset could not be serialized."""


class ConfigError(TfctlError):
    """The config file exists but could not be loaded."""


__all__ = ["ConfigError", "DocumentError", "RenderError", "TfctlError"]
