"""JDK-backed toolchain: ``javac`` for compilation, jar archives via zipfile."""

from __future__ import annotations

import os
import shutil
import subprocess
import tempfile
import zipfile
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence, Tuple

from ..constants import DEFAULT_MANIFEST, MANIFEST_ENTRY
from ..errors import CompilationError, GenerationIOError
from ..logging import get_logger
from ..models import BuildArtifact

Runner = Callable[..., Tuple[int, str]]


class JdkToolchain:
    """Runs the system Java compiler and writes jar files."""

    def __init__(
        self,
        executable: str | None = None,
        *,
        encoding: str = "UTF8",
        extra_args: Sequence[str] = (),
        runner: Runner | None = None,
    ) -> None:
        self._executable = executable
        self._encoding = encoding
        self._extra_args = list(extra_args)
        self._runner = runner or self._default_runner
        self.logger = get_logger("toolchain")

    def locate_compiler(self) -> Optional[str]:
        """Return the javac executable: configured, then $JAVA_HOME/bin, then PATH."""
        if self._executable:
            found = shutil.which(self._executable)
            if found:
                return found
            return self._executable if Path(self._executable).is_file() else None
        java_home = os.environ.get("JAVA_HOME")
        if java_home:
            candidate = shutil.which("javac", path=str(Path(java_home) / "bin"))
            if candidate:
                return candidate
        return shutil.which("javac")

    def compile(self, source_path: Path, classpath: Sequence[Path]) -> int:
        compiler = self.locate_compiler()
        if compiler is None:
            raise CompilationError(
                "No Java compiler available; install a JDK or set JAVA_HOME"
            )
        args = [
            compiler,
            str(source_path),
            "-cp",
            os.pathsep.join(str(entry) for entry in classpath),
            "-encoding",
            self._encoding,
            "-implicit:none",
            *self._extra_args,
        ]
        self.logger.debug("Running %s", " ".join(args))
        try:
            status, output = self._runner(args, cwd=source_path.parent)
        except OSError as exc:
            raise CompilationError(f"Could not run {compiler}: {exc}") from exc
        if output.strip():
            log = self.logger.error if status != 0 else self.logger.debug
            for line in output.strip().splitlines():
                log("javac: %s", line)
        return status

    def archive(self, artifacts: Sequence[BuildArtifact], archive_path: Path) -> Path:
        """Write the artifacts next to a default manifest, replacing ``archive_path`` atomically."""
        directory = archive_path.parent
        try:
            handle, temp_name = tempfile.mkstemp(prefix=".implgen-", suffix=".jar", dir=directory)
        except OSError as exc:
            raise GenerationIOError(f"Could not create archive in {directory}: {exc}") from exc
        os.close(handle)
        temp_path = Path(temp_name)
        try:
            with zipfile.ZipFile(temp_path, "w", compression=zipfile.ZIP_DEFLATED) as jar:
                jar.writestr(MANIFEST_ENTRY, DEFAULT_MANIFEST)
                for artifact in artifacts:
                    jar.write(artifact.class_file, artifact.entry_name)
            os.replace(temp_path, archive_path)
        except OSError as exc:
            temp_path.unlink(missing_ok=True)
            raise GenerationIOError(f"Could not write archive {archive_path}: {exc}") from exc
        self.logger.debug("Archived %d compiled unit(s) into %s", len(artifacts), archive_path)
        return archive_path

    @staticmethod
    def _default_runner(args: Iterable[str], *, cwd: Path) -> Tuple[int, str]:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=False,
            text=True,
            capture_output=True,
        )
        return completed.returncode, (completed.stdout or "") + (completed.stderr or "")


__all__ = ["JdkToolchain"]
