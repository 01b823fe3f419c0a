"""
Discovery of inputs through //go:generate directives.

A file asks for generation with a line such as::

    //go:generate topb -in order.go -pb example.com/app/pb

The ``-in`` path is relative to the directory of the file holding the
directive. ``-pb`` is optional and overrides the configured wire package.
"""

from __future__ import annotations

import os
import re
import shlex
from collections.abc import Iterator
from pathlib import Path

from ...logging_utils import get_logger
from .base import DiscoveryStrategy, SourceTarget

logger = get_logger("loader")


class DirectiveDiscovery(DiscoveryStrategy):
    """Walks directory trees and collects the inputs named by directives."""

    # Directories the go tool ignores as well
    SKIPPED_DIRECTORIES = {"testdata", "vendor"}

    def __init__(self, output_prefix: str, tool: str = "topb"):
        super().__init__(output_prefix)
        self.tool = tool
        self._pattern = re.compile(rf"^//go:generate\s+{re.escape(tool)}(?:\s+(?P<args>.*))?$")

    def discover(self, paths: list[Path]) -> list[SourceTarget]:
        targets: list[SourceTarget] = []
        seen: set[Path] = set()

        for root in paths or [Path(".")]:
            for source in self._walk(root):
                for target in self.targets_in(source):
                    key = target.path.resolve()
                    if key in seen:
                        continue
                    seen.add(key)
                    targets.append(target)

        return targets

    def targets_in(self, source: Path) -> list[SourceTarget]:
        """Return the targets requested by the directives of one file."""
        try:
            text = source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping %s: %s", source, e)
            return []

        targets = []
        for lineno, line in enumerate(text.splitlines(), start=1):
            match = self._pattern.match(line.rstrip())
            if match is None:
                continue
            options = self._parse_arguments(match.group("args") or "")
            if not options.get("in"):
                logger.debug("%s:%d: directive without -in, nothing to generate", source, lineno)
                continue
            path = Path(options["in"])
            if not path.is_absolute():
                path = source.parent / path
            logger.debug("%s:%d: directive for %s", source, lineno, path)
            targets.append(SourceTarget(path=path, wire_package=options.get("pb") or None))
        return targets

    def _parse_arguments(self, args: str) -> dict[str, str]:
        """Parse ``-flag value`` and ``-flag=value`` pairs."""
        try:
            tokens = shlex.split(args)
        except ValueError:
            return {}

        options: dict[str, str] = {}
        i = 0
        while i < len(tokens):
            token = tokens[i]
            i += 1
            if not token.startswith("-"):
                continue
            name = token.lstrip("-")
            if "=" in name:
                name, value = name.split("=", 1)
            elif i < len(tokens):
                value = tokens[i]
                i += 1
            else:
                value = ""
            options[name] = value
        return options

    def _walk(self, root: Path) -> Iterator[Path]:
        if root.is_file():
            yield root
            return
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if not self._skip_directory(d))
            for name in sorted(filenames):
                path = Path(dirpath) / name
                if self.is_go_source(path):
                    yield path

    def _skip_directory(self, name: str) -> bool:
        return name.startswith((".", "_")) or name in self.SKIPPED_DIRECTORIES
