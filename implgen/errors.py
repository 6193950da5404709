"""Exception hierarchy for implementation generation failures."""

from __future__ import annotations


class ImplerError(RuntimeError):
    """Base class for every failure raised while generating an implementation."""


class InvalidTargetError(ImplerError):
    """Raised when a type cannot be implemented (final, private, enum, ...)."""


class UnresolvableTargetError(ImplerError):
    """Raised when a type name cannot be resolved to metadata."""

    def __init__(self, name: str, detail: str | None = None) -> None:
        message = f"Cannot resolve type '{name}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.name = name


class GenerationIOError(ImplerError):
    """Raised when directories, sources or archives cannot be read or written."""


class CompilationError(ImplerError):
    """Raised when the compiler is missing or reports a failure."""

    def __init__(self, message: str, *, exit_status: int | None = None) -> None:
        super().__init__(message)
        self.exit_status = exit_status


class ConfigError(ImplerError):
    """Raised when the configuration file cannot be parsed."""


class CatalogError(ImplerError):
    """Raised when a type catalog is malformed."""


__all__ = [
    "CatalogError",
    "CompilationError",
    "ConfigError",
    "GenerationIOError",
    "ImplerError",
    "InvalidTargetError",
    "UnresolvableTargetError",
]
