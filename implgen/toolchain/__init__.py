"""Compiler and archiver collaborators."""

from .base import Toolchain
from .jdk import JdkToolchain

__all__ = ["JdkToolchain", "Toolchain"]
