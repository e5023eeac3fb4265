"""
Infrastructure layer - Concrete collaborators.

This layer contains file system, environment and document format integrations.
It depends on both Application and Domain layers.
"""

from . import testing
from .environment import OsEnvironment
from .filesystem import LocalFileSystem
from .loader import FileLoader
from .readers import ExtensionDocumentReader, JsonDocumentReader, YamlDocumentReader
from .registry import StaticLocationResolver
from .settings import CompilerSettings

__all__ = [
    "FileLoader",
    "CompilerSettings",
    "LocalFileSystem",
    "OsEnvironment",
    "StaticLocationResolver",
    "YamlDocumentReader",
    "JsonDocumentReader",
    "ExtensionDocumentReader",
    "testing",
]
