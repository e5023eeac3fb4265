"""
Application layer - The compilation pipeline.

This layer turns raw service documents into definitions stored in a container builder.
It depends only on the Domain layer.
"""

from .container_builder import ContainerBuilder
from .definition_compiler import DefinitionCompiler
from .document_compiler import DocumentCompiler
from .export_lookup import ClassExporterLookup, select_export
from .module_path_resolver import ModulePathResolver
from .value_parser import ValueParser

__all__ = [
    "ContainerBuilder",
    "DocumentCompiler",
    "DefinitionCompiler",
    "ValueParser",
    "ModulePathResolver",
    "ClassExporterLookup",
    "select_export",
]
