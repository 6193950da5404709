"""Generate compilable stub implementations of Java classes and interfaces."""

__version__ = "0.1.0"
