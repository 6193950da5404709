"""Build orchestration: emit the implementation source, compile and archive it."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from .collector import collect_abstract_members, collect_constructors
from .config import ImplGenConfig
from .constants import CLASS_EXTENSION
from .errors import CompilationError, GenerationIOError
from .logging import get_logger
from .models import BuildArtifact, TypeDescriptor
from .rendering import SourceRenderer
from .resolvers import TypeIndex, build_index
from .toolchain import JdkToolchain, Toolchain
from .validation import ensure_eligible


class BuildDriver:
    """Generates ``<SimpleName>Impl`` sources and, on request, a jar holding the compiled class."""

    def __init__(
        self,
        index: TypeIndex | None = None,
        toolchain: Toolchain | None = None,
        renderer: SourceRenderer | None = None,
        *,
        keep_intermediates: bool = True,
    ) -> None:
        self.index = index or TypeIndex()
        self.toolchain = toolchain or JdkToolchain()
        self.renderer = renderer or SourceRenderer()
        self.keep_intermediates = keep_intermediates
        self.logger = get_logger("driver")

    @classmethod
    def from_config(cls, config: ImplGenConfig) -> "BuildDriver":
        """Wire an index and a JDK toolchain from the loaded configuration."""
        index = build_index(config.sources.catalogs, config.sources.source_paths)
        toolchain = JdkToolchain(
            config.compiler.executable,
            encoding=config.compiler.encoding,
            extra_args=config.compiler.extra_args,
        )
        return cls(index, toolchain, keep_intermediates=config.archive.keep_intermediates)

    def implement(self, name: str, output_root: Path) -> Path:
        """Resolve ``name`` and write its implementation source under ``output_root``."""
        return self.generate(self.index.resolve(name), output_root)

    def implement_jar(self, name: str, archive_path: Path) -> Path:
        """Resolve ``name`` and write a jar with its compiled implementation."""
        return self.generate_archive(self.index.resolve(name), archive_path)

    def generate(self, descriptor: TypeDescriptor, output_root: Path) -> Path:
        """Write ``<root>/<package path>/<SimpleName>Impl.java`` and return its path."""
        ensure_eligible(descriptor)
        members = collect_abstract_members(descriptor)
        constructors = collect_constructors(descriptor)
        rendered = self.renderer.render_file(descriptor, members, constructors)
        self.logger.debug(
            "Rendering %s with %d constructor(s) and %d method(s)",
            rendered.class_name,
            len(constructors),
            len(members),
        )

        directory = Path(output_root)
        if descriptor.package:
            directory = directory.joinpath(*descriptor.package.split("."))
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise GenerationIOError(f"Could not create directory {directory}: {exc}") from exc

        target = directory / rendered.file_name
        try:
            target.write_text(rendered.escaped(), encoding="utf-8", newline="\n")
        except OSError as exc:
            raise GenerationIOError(f"Could not write {target}: {exc}") from exc
        self.logger.info("Generated %s", target)
        return target

    def generate_archive(self, descriptor: TypeDescriptor, archive_path: Path) -> Path:
        """Generate, compile and archive the implementation of ``descriptor``."""
        ensure_eligible(descriptor)
        archive_path = Path(archive_path).resolve()
        work_dir = archive_path.parent

        source_path = self.generate(descriptor, work_dir)
        classpath: List[Path] = [work_dir]
        if descriptor.code_location is not None:
            classpath.append(Path(descriptor.code_location))

        status = self.toolchain.compile(source_path, classpath)
        if status != 0:
            raise CompilationError(
                f"Compilation of {source_path.name} failed with exit status {status}",
                exit_status=status,
            )

        parts = descriptor.package.split(".") if descriptor.package else []
        entry_name = "/".join(parts + [descriptor.impl_name + CLASS_EXTENSION])
        class_file = work_dir.joinpath(*entry_name.split("/"))
        if not class_file.is_file():
            raise CompilationError(f"Compiler produced no class file at {class_file}")

        self.toolchain.archive([BuildArtifact(class_file=class_file, entry_name=entry_name)], archive_path)
        self.logger.info("Archived %s into %s", entry_name, archive_path)

        if not self.keep_intermediates:
            self._remove_intermediates(source_path, class_file)
        return archive_path

    def _remove_intermediates(self, *paths: Path) -> None:
        for path in paths:
            try:
                os.remove(path)
            except FileNotFoundError:
                continue
            except OSError as exc:
                raise GenerationIOError(f"Could not remove {path}: {exc}") from exc
            self.logger.debug("Removed %s", path)


__all__ = ["BuildDriver"]
