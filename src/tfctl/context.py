"""tfctl context for passing state between commands."""

from pathlib import Path
from typing import Optional

import click

from . import config
from .config import Config


class TfctlContext:
    def __init__(self):
        self.config_path: Optional[Path] = None
        self.config: Optional[Config] = None

    def load(self, config_path: Optional[str]) -> Config:
        """Resolve and load tfctl.yaml once for the invocation."""
        self.config_path = Path(config_path) if config_path else None
        self.config = config.use(self.config_path)
        return self.config

    def scoped(self, namespace: str) -> Config:
        """Return the config with lookups scoped to ``namespace``."""
        self.config = config.set_namespace(namespace)
        return self.config


pass_context = click.make_pass_decorator(TfctlContext, ensure=True)
