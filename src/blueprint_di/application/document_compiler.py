import logging
import os
from typing import Any, Dict, List, Tuple, Union

from pydantic import ValidationError

from blueprint_di.application.definition_compiler import DefinitionCompiler
from blueprint_di.application.value_parser import ValueParser
from blueprint_di.domain import (
    Alias,
    CircularImportError,
    DocumentError,
    IContainerBuilder,
    IDocumentReader,
    IEnvironment,
    ILocationResolver,
    RawDocument,
    RawImport,
    RawService,
)

logger = logging.getLogger(__name__)


class DocumentCompiler:
    """Compiles service documents into a container builder.

    Each document is processed fully before control returns: parameters, then its
    imports depth-first, then its services. Every document resolves relative paths
    against its own directory. Any failure aborts the whole load.

    Attributes:
        _container: Receives parameters, aliases and definitions.
        _reader: Reads raw documents.
        _definition_compiler: Compiles individual service records.
    """

    def __init__(
        self,
        container: IContainerBuilder,
        reader: IDocumentReader,
        location_resolver: ILocationResolver,
        environment: IEnvironment,
    ) -> None:
        """Initialize the compiler with its collaborators.

        Args:
            container: The container builder to populate.
            reader: Reads and deserializes documents.
            location_resolver: Resolves class specifiers to classes.
            environment: Source of ``%env(NAME)%`` values.
        """
        self._container = container
        self._reader = reader
        self._definition_compiler = DefinitionCompiler(
            container,
            location_resolver,
            ValueParser(container, environment),
        )

    @property
    def container(self) -> IContainerBuilder:
        return self._container

    def load(self, location: str) -> None:
        """Compile a document and everything it imports.

        Args:
            location: Path of the document.

        Raises:
            DocumentError: If a document is unreadable, malformed or imported circularly.
            ResolutionError: If a class specifier or parameter cannot be resolved.

        Example:
            >>> compiler = DocumentCompiler(builder, reader, resolver, environment)
            >>> compiler.load("config/services.yml")
            >>> builder.get_definition("mailer")
        """
        self._compile(os.path.abspath(location), ())

    def _compile(self, location: str, import_chain: Tuple[str, ...]) -> None:
        if location in import_chain:
            raise CircularImportError(import_chain + (location,))
        import_chain = import_chain + (location,)

        document = self._read(location)
        base_dir = os.path.dirname(location)

        self._compile_parameters(document.parameters)
        self._compile_imports(document.imports, base_dir, import_chain)
        self._compile_services(document.services, base_dir)

        logger.info(
            f"Compiled {location}: {len(document.parameters)} parameters, "
            f"{len(document.imports)} imports, {len(document.services)} services"
        )

    def _read(self, location: str) -> RawDocument:
        raw = self._reader.read(location)
        try:
            return RawDocument.model_validate(raw)
        except ValidationError as e:
            raise DocumentError(f"Invalid service document {location}: {e}") from e

    def _compile_parameters(self, parameters: Dict[str, Any]) -> None:
        for name, value in parameters.items():
            self._container.set_parameter(name, value)

    def _compile_imports(self, imports: List[RawImport], base_dir: str, import_chain: Tuple[str, ...]) -> None:
        for entry in imports:
            location = os.path.normpath(os.path.join(base_dir, entry.resource))
            logger.debug(f"Importing {location}")
            self._compile(location, import_chain)

    def _compile_services(self, services: Dict[str, Union[str, RawService]], base_dir: str) -> None:
        for service_id, service in services.items():
            compiled = self._definition_compiler.compile(service_id, service, base_dir)
            if isinstance(compiled, Alias):
                self._container.set_alias(service_id, compiled.target)
            else:
                self._container.set_definition(service_id, compiled)
            logger.debug(f"Registered service '{service_id}'")
