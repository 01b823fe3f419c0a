"""
Writer module: output naming and atomic writes.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter, output_path_for

__all__ = ["AtomicWriter", "output_path_for"]
