"""
Click context extension for passforge CLI.

Provides PassforgeContext dataclass that holds passforge-specific data
passed through the Click command chain via ctx.obj.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path

from ..hashing.finder import AlgorithmFinder


@dataclass
class PassforgeContext:
    """Extended context passed through Click command chain.

    Attributes:
        cwd: Current working directory
        is_interactive: Whether stdin is a TTY (for prompts)
        config_path: Explicit config file given with --config
    """

    cwd: Path
    is_interactive: bool
    config_path: Path | None = None
    _finder: AlgorithmFinder | None = field(default=None, repr=False)

    @classmethod
    def create(cls, config_path: Path | None = None, cwd: Path | None = None) -> PassforgeContext:
        """Create a PassforgeContext for the current environment."""
        return cls(
            cwd=cwd or Path.cwd(),
            is_interactive=sys.stdin.isatty(),
            config_path=config_path,
        )

    @property
    def finder(self) -> AlgorithmFinder:
        """Finder built from the configuration, loaded on first use.

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        if self._finder is None:
            from ..core.settings import load_settings
            from ..services.logging import configure_logging

            settings = load_settings(config_path=self.config_path, start_dir=str(self.cwd))
            configure_logging(settings.logging)
            self._finder = AlgorithmFinder(settings)
        return self._finder
