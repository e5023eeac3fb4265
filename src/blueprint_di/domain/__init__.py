"""
Domain layer - Core models and collaborator contracts.

This layer contains the definition model, the raw document schema and the
interfaces of every external collaborator. It has no dependencies on other layers.
"""

from .documents import RawCall, RawDocument, RawFactory, RawImport, RawService, RawTag
from .enums import ImplementationKind
from .exceptions import (
    BlueprintException,
    CircularImportError,
    DocumentError,
    MissingReferenceError,
    ResolutionError,
)
from .interfaces import (
    CompiledService,
    IContainerBuilder,
    IDocumentReader,
    IEnvironment,
    IFileSystem,
    ILocationResolver,
)
from .models import (
    Alias,
    Argument,
    ClassImplementation,
    Definition,
    FactoryImplementation,
    LiteralValue,
    MethodCall,
    ParameterHandle,
    ServiceReference,
    Tag,
    TaggedCollectionReference,
)

__all__ = [
    # Enums
    "ImplementationKind",
    # Exceptions
    "BlueprintException",
    "ResolutionError",
    "MissingReferenceError",
    "DocumentError",
    "CircularImportError",
    # Interfaces
    "IContainerBuilder",
    "IEnvironment",
    "IFileSystem",
    "ILocationResolver",
    "IDocumentReader",
    "CompiledService",
    # Models
    "Argument",
    "LiteralValue",
    "ServiceReference",
    "ParameterHandle",
    "TaggedCollectionReference",
    "Alias",
    "ClassImplementation",
    "FactoryImplementation",
    "MethodCall",
    "Tag",
    "Definition",
    # Raw documents
    "RawDocument",
    "RawImport",
    "RawService",
    "RawFactory",
    "RawCall",
    "RawTag",
]
