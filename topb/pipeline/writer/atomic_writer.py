"""
Atomic file writer for generated code.

Ensures that an output file always holds either its previous content or
the complete new content, never a partial write.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..errors import EmissionError, ParseError, WriteError
from ..source_ast import GoSourceParser

# Mode of newly created outputs (group/other readable, like most source files)
DEFAULT_FILE_MODE = 0o644


def output_path_for(source: Path, prefix: str = "autogen_topb_") -> Path:
    """Return the generated file path for an input file.

    The output lives next to the input: ``dir/Foo.go`` becomes
    ``dir/autogen_topb_Foo.go``.
    """
    return source.with_name(f"{prefix}{source.stem}{source.suffix}")


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Validate the content
    2. Write to a temporary file in the same directory
    3. Atomically replace the target file
    """

    def __init__(self, validate_go: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate_go: Optional validation function for Go code
        """
        self._validate_go = validate_go or self._default_validate_go
        self._parser: GoSourceParser | None = None

    def write(self, path: Path, content: str, validate: bool = True) -> bool:
        """Write content to file atomically.

        The parent directory must exist. A file already holding exactly
        this content is left untouched.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before writing

        Returns:
            True if the file was written, False if it was already up to date

        Raises:
            EmissionError: If validation fails
            WriteError: If file operations fail
        """
        if validate:
            self._validate_go(content)

        if self._has_content(path, content):
            return False

        try:
            # Same directory ensures atomic rename on the same filesystem
            temp_fd, temp_path_str = tempfile.mkstemp(
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp",
                text=True,
            )
        except OSError as e:
            raise WriteError(f"cannot write {path}: {e}") from e

        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
            os.chmod(temp_path, self._file_mode(path))
            temp_path.replace(path)
        except Exception as e:
            # Clean up temp file on any error
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass  # Best effort cleanup
            if isinstance(e, OSError):
                raise WriteError(f"cannot write {path}: {e}") from e
            raise

        return True

    def remove(self, path: Path) -> bool:
        """Delete a previously generated file.

        Returns:
            True if a file was deleted, False if there was none

        Raises:
            WriteError: If the file exists but cannot be deleted
        """
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            raise WriteError(f"cannot remove {path}: {e}") from e
        return True

    def _has_content(self, path: Path, content: str) -> bool:
        try:
            return path.is_file() and path.read_bytes() == content.encode("utf-8")
        except OSError:
            return False

    def _file_mode(self, path: Path) -> int:
        try:
            return path.stat().st_mode & 0o777
        except OSError:
            return DEFAULT_FILE_MODE

    def _default_validate_go(self, content: str) -> None:
        """Default Go validation: the content must parse.

        Raises:
            EmissionError: If validation fails
        """
        if self._parser is None:
            self._parser = GoSourceParser()
        try:
            self._parser.check_syntax(content)
        except ParseError as e:
            raise EmissionError(f"Generated Go code is not valid: {e}") from e
