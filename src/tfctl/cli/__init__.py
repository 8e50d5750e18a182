"""tfctl command line interface.

``cli`` and ``main`` resolve lazily, so importing ``tfctl.cli`` does not load
the command modules and ``python -m tfctl.cli.main`` runs without runpy
finding its own module already imported.
"""

__all__ = ["cli", "main"]


def __getattr__(name):  # pragma: no cover - trivial lazy import
    if name == "cli":
        from .main import cli

        return cli
    if name == "main":
        from .main import main

        return main
    raise AttributeError(name)
