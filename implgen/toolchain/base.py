"""Contract for compiler and archiver collaborators."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence

from ..models import BuildArtifact


class Toolchain(Protocol):
    """Compiles generated sources and packages the compiled output."""

    def compile(self, source_path: Path, classpath: Sequence[Path]) -> int:
        """Compile ``source_path`` and return the compiler's exit status."""

    def archive(self, artifacts: Sequence[BuildArtifact], archive_path: Path) -> Path:
        """Write ``artifacts`` into an archive at ``archive_path``."""
