"""Filesystem side of a batch export: manifest loading and artifact writing.

The export core never touches the filesystem; everything here sits outside
it and only consumes its return values.
"""

from .artifacts import WrittenArtifact, WrittenArtifacts, write_batch_artifacts
from .manifest_loader import load_manifest_file

__all__ = [
    "WrittenArtifact",
    "WrittenArtifacts",
    "write_batch_artifacts",
    "load_manifest_file",
]
