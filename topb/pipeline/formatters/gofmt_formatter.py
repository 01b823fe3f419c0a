"""
gofmt formatter for generated Go code.
"""

from __future__ import annotations

import shutil
import subprocess

from ...logging_utils import get_logger
from ..config import FormatterConfig
from .base import Formatter

logger = get_logger("formatter")


class GofmtFormatter(Formatter):
    """Formatter piping code through gofmt."""

    def __init__(self):
        self._available: dict[str, bool] = {}

    def is_available(self, config: FormatterConfig) -> bool:
        """Check if the gofmt executable is on PATH."""
        if config.command not in self._available:
            self._available[config.command] = shutil.which(config.command) is not None
        return self._available[config.command]

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format Go code with gofmt.

        Returns the input unchanged when gofmt is missing or fails.
        """
        if not self.is_available(config):
            logger.debug("%s not found, leaving output unformatted", config.command)
            return code

        try:
            result = subprocess.run(
                [config.command],
                input=code,
                capture_output=True,
                text=True,
                timeout=config.timeout,
            )
        except (subprocess.SubprocessError, OSError) as e:
            logger.warning("%s failed: %s", config.command, e)
            return code

        if result.returncode != 0:
            logger.warning("%s failed: %s", config.command, result.stderr.strip())
            return code
        return result.stdout
