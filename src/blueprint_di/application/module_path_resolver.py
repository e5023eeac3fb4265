import logging
import os
from pathlib import PurePath
from typing import Iterable, List

from blueprint_di.domain import IFileSystem

logger = logging.getLogger(__name__)

# Older documents reached shared packages through this prefix
LEGACY_PACKAGE_PREFIX = "../site-packages/"


class ModulePathResolver:
    """Turns a class specifier into a concrete, loadable module location.

    Strategies are tried in order, the first success wins:

    1. Absolute paths are returned unchanged.
    2. The legacy package prefix is stripped.
    3. A file or directory at ``base_dir/specifier`` (with or without the module
       suffix) is returned directly.
    4. Otherwise the file system resolves the specifier against candidate package
       roots: the target directory, then a dependency folder in it and in each of
       its ancestors up to the root. Bare module names also search the roots the
       running process already knows for them.

    Attributes:
        _file_system: Existence checks and module resolution.
        _dependency_dir_name: Name of the nested dependency folder.
        _module_suffix: File suffix of implementation modules.
        _include_process_paths: Whether bare names also search process roots.
    """

    def __init__(
        self,
        file_system: IFileSystem,
        dependency_dir_name: str = "site-packages",
        module_suffix: str = ".py",
        include_process_paths: bool = True,
    ) -> None:
        self._file_system = file_system
        self._dependency_dir_name = dependency_dir_name
        self._module_suffix = module_suffix
        self._include_process_paths = include_process_paths

    def resolve(self, specifier: str, base_dir: str) -> str:
        """Resolve a class specifier against a base directory.

        Args:
            specifier: Relative path, absolute path or bare module name.
            base_dir: Directory of the defining document, or the configured default.

        Returns:
            The module location.

        Raises:
            ResolutionError: If no candidate root contains the module.

        Example:
            >>> resolver.resolve("./handlers/user_handler", "/srv/app/config")
            '/srv/app/config/handlers/user_handler'
        """
        if os.path.isabs(specifier):
            return specifier

        if specifier.startswith(LEGACY_PACKAGE_PREFIX):
            specifier = specifier[len(LEGACY_PACKAGE_PREFIX) :]

        joined = os.path.normpath(os.path.join(base_dir, specifier))
        if self._file_system.exists(joined + self._module_suffix) or self._file_system.exists(joined):
            return joined

        is_relative = specifier.startswith(".")
        if is_relative:
            target_dir = os.path.normpath(os.path.join(base_dir, os.path.dirname(specifier)))
        else:
            target_dir = base_dir
        search_paths = self.collect_search_paths(target_dir)

        if is_relative:
            specifier = joined
        elif self._include_process_paths:
            search_paths = _unique(search_paths + self._file_system.lookup_paths(specifier))

        logger.debug(f"Resolving '{specifier}' against {len(search_paths)} search paths")
        return self._file_system.resolve_module(specifier, search_paths)

    def collect_search_paths(self, directory: str) -> List[str]:
        """List candidate package roots for a directory, deepest first.

        Args:
            directory: The directory the search starts from.

        Returns:
            The directory itself, then the dependency folder of the directory and
            of each of its ancestors up to the filesystem root.

        Example:
            >>> resolver.collect_search_paths("/srv/app")
            ['/srv/app', '/srv/app/site-packages', '/srv/site-packages', '/site-packages']
        """
        path = PurePath(directory)
        paths = [directory]
        for ancestor in (path, *path.parents):
            paths.append(str(ancestor / self._dependency_dir_name))
        return paths


def _unique(paths: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(paths))
