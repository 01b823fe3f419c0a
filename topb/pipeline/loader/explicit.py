"""
Discovery of inputs named on the command line.
"""

from __future__ import annotations

from pathlib import Path

from ...logging_utils import get_logger
from .base import DiscoveryStrategy, SourceTarget

logger = get_logger("loader")


class ExplicitDiscovery(DiscoveryStrategy):
    """Uses the given files, and the Go files directly inside given directories."""

    def discover(self, paths: list[Path]) -> list[SourceTarget]:
        targets: list[SourceTarget] = []
        seen: set[Path] = set()

        for path in paths:
            if path.is_dir():
                candidates = sorted(p for p in path.iterdir() if self.is_go_source(p))
                logger.debug("Directory %s: %d Go file(s)", path, len(candidates))
            else:
                # Missing files are kept so that reading them reports the error
                candidates = [path]

            for candidate in candidates:
                key = candidate.resolve()
                if key in seen:
                    continue
                seen.add(key)
                targets.append(SourceTarget(path=candidate))

        return targets
