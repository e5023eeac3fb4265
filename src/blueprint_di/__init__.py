"""
blueprint-di: Compiles declarative service documents into container definitions.

Public API exports for the blueprint-di package.
"""

import logging

# Application exports
from blueprint_di.application.container_builder import ContainerBuilder
from blueprint_di.application.document_compiler import DocumentCompiler

# Domain exports
from blueprint_di.domain.enums import ImplementationKind
from blueprint_di.domain.exceptions import (
    BlueprintException,
    CircularImportError,
    DocumentError,
    MissingReferenceError,
    ResolutionError,
)
from blueprint_di.domain.models import (
    Alias,
    Definition,
    LiteralValue,
    ParameterHandle,
    ServiceReference,
    TaggedCollectionReference,
)

# Infrastructure exports
from blueprint_di.infrastructure.loader import FileLoader
from blueprint_di.infrastructure.settings import CompilerSettings

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Compilation
    "ContainerBuilder",
    "DocumentCompiler",
    "FileLoader",
    "CompilerSettings",
    # Models
    "Definition",
    "Alias",
    "LiteralValue",
    "ServiceReference",
    "ParameterHandle",
    "TaggedCollectionReference",
    # Enums
    "ImplementationKind",
    # Exceptions
    "BlueprintException",
    "ResolutionError",
    "MissingReferenceError",
    "DocumentError",
    "CircularImportError",
]
