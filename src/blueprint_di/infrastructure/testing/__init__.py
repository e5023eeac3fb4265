"""
Testing utilities module.

Provides in-memory collaborators for compiling service documents in tests.
"""

from .utilities import (
    InMemoryDocumentReader,
    InMemoryFileSystem,
    StaticEnvironment,
    create_test_compiler,
)

__all__ = [
    "InMemoryFileSystem",
    "InMemoryDocumentReader",
    "StaticEnvironment",
    "create_test_compiler",
]
