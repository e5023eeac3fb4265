from typing import Optional

from blueprint_di.application import ClassExporterLookup, ContainerBuilder, DocumentCompiler, ModulePathResolver
from blueprint_di.domain import IContainerBuilder, IDocumentReader, IEnvironment, IFileSystem
from blueprint_di.infrastructure.environment import OsEnvironment
from blueprint_di.infrastructure.filesystem import LocalFileSystem
from blueprint_di.infrastructure.readers import ExtensionDocumentReader
from blueprint_di.infrastructure.settings import CompilerSettings


class FileLoader(DocumentCompiler):
    """Document compiler wired to the local file system and process environment.

    Example:
        >>> builder = ContainerBuilder()
        >>> loader = FileLoader(builder)
        >>> loader.load("config/services.yml")
        >>> builder.get_definition("mailer").arguments
        (ServiceReference(target='transport', optional=False),)
    """

    def __init__(
        self,
        container: Optional[IContainerBuilder] = None,
        settings: Optional[CompilerSettings] = None,
        environment: Optional[IEnvironment] = None,
        file_system: Optional[IFileSystem] = None,
        reader: Optional[IDocumentReader] = None,
    ) -> None:
        """Initialize the loader.

        Args:
            container: Builder to populate. A new one using the configured
                default directory is created when omitted.
            settings: Compiler settings, read from the environment when omitted.
            environment: Source of ``%env(NAME)%`` values, the process environment by default.
            file_system: Module lookup and loading, the local file system by default.
            reader: Document reader, chosen by file extension by default.
        """
        settings = settings or CompilerSettings()
        if container is None:
            container = ContainerBuilder(default_dir=settings.default_dir)
        file_system = file_system or LocalFileSystem(settings.module_suffix)
        path_resolver = ModulePathResolver(
            file_system,
            dependency_dir_name=settings.dependency_dir_name,
            module_suffix=settings.module_suffix,
            include_process_paths=settings.include_process_paths,
        )
        super().__init__(
            container,
            reader or ExtensionDocumentReader(),
            ClassExporterLookup(path_resolver, file_system, settings.module_suffix),
            environment or OsEnvironment(),
        )
