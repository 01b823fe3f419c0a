"""
Formatter interface for post-processing generated Go code.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..config import FormatterConfig


class Formatter(ABC):
    """Rewrites generated code through an external tool such as gofmt."""

    @abstractmethod
    def format(self, code: str, config: FormatterConfig) -> str:
        """Return the formatted code, or ``code`` itself if the tool cannot run."""

    @abstractmethod
    def is_available(self, config: FormatterConfig) -> bool:
        """Whether ``config.command`` can be run."""
