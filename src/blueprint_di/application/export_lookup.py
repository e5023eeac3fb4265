import logging
from pathlib import PurePath
from typing import Any, List, Optional

from blueprint_di.application.module_path_resolver import ModulePathResolver
from blueprint_di.domain import BlueprintException, IFileSystem, ILocationResolver, ResolutionError

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "default"


class ClassExporterLookup(ILocationResolver):
    """Locates a class specifier on the file system and selects its export.

    Exports are chosen in priority order: the preferred export name, the module's
    ``default`` export, then the export named after the specifier's basename
    (``user_service`` also matches ``UserService``).

    Attributes:
        _path_resolver: Resolves specifiers to module locations.
        _file_system: Loads modules.
        _module_suffix: File suffix stripped from basenames.
    """

    def __init__(self, path_resolver: ModulePathResolver, file_system: IFileSystem, module_suffix: str = ".py") -> None:
        self._path_resolver = path_resolver
        self._file_system = file_system
        self._module_suffix = module_suffix

    def locate(self, specifier: str, base_dir: str, export_name: Optional[str] = None) -> Any:
        """Resolve, load and select the export a class specifier names.

        Args:
            specifier: The class specifier as written in a document.
            base_dir: Directory relative specifiers are resolved against.
            export_name: Preferred export name, if any.

        Returns:
            The selected export, or None when nothing matches.

        Raises:
            ResolutionError: If the module cannot be resolved or loaded.
        """
        location = self._path_resolver.resolve(specifier, base_dir)
        try:
            exports = self._file_system.load_module(location)
        except BlueprintException:
            raise
        except Exception as e:
            raise ResolutionError(location, f"Failed to load module: {e}") from e
        return select_export(exports, specifier, export_name, self._module_suffix)


def select_export(exports: Any, specifier: str, export_name: Optional[str] = None, module_suffix: str = ".py") -> Any:
    """Select the implementation from a loaded module's exports.

    Args:
        exports: Loaded module, or any object exposing exports as attributes.
        specifier: The class specifier the module was resolved from.
        export_name: Preferred export name, if any.
        module_suffix: File suffix stripped from the basename.

    Returns:
        The first matching export, or None.
    """
    for name in _candidate_names(specifier, export_name, module_suffix):
        selected = getattr(exports, name, None)
        if selected is not None:
            return selected

    logger.debug(f"No export of '{specifier}' matches {export_name or 'its basename'}")
    return None


def _candidate_names(specifier: str, export_name: Optional[str], module_suffix: str) -> List[str]:
    basename = PurePath(specifier).name
    if basename.endswith(module_suffix):
        basename = basename[: -len(module_suffix)]
    # dotted module names export after their last segment
    basename = basename.rsplit(".", 1)[-1]

    names = [DEFAULT_EXPORT_NAME, basename, _camel_case(basename)]
    if export_name:
        names.insert(0, export_name)
    return [name for name in dict.fromkeys(names) if name]


def _camel_case(name: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in name.split("_"))
