import hashlib
import importlib
import importlib.util
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Sequence

from blueprint_di.domain import IFileSystem, ResolutionError

logger = logging.getLogger(__name__)


def module_candidates(path: str, module_suffix: str = ".py") -> List[str]:
    """List the files a module path may denote: itself, with the suffix, or a package."""
    return [path, path + module_suffix, os.path.join(path, "__init__" + module_suffix)]


def specifier_to_path(specifier: str, module_suffix: str = ".py") -> str:
    """Turn a bare module specifier into a relative path.

    Dotted names (``mailer.smtp``) become nested paths; slashed names and file
    names are kept as written.
    """
    if "/" in specifier or specifier.endswith(module_suffix):
        return specifier
    return specifier.replace(".", os.sep)


class LocalFileSystem(IFileSystem):
    """File system access and Python module loading for class resolution.

    Modules found under an entry of ``sys.path`` are imported by name, so the
    loaded classes are the same objects the rest of the process imports. Other
    modules are loaded straight from their file. Loaded modules are cached per path.

    Attributes:
        _module_suffix: File suffix of implementation modules.
        _modules: Loaded modules by file path.
    """

    def __init__(self, module_suffix: str = ".py") -> None:
        self._module_suffix = module_suffix
        self._modules: Dict[str, Any] = {}

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def lookup_paths(self, specifier: str) -> List[str]:
        """Return ``sys.path`` roots, preceded by the root of an importable top-level package."""
        paths = [os.path.abspath(entry) if entry else os.getcwd() for entry in sys.path]
        root = self._package_root(specifier)
        if root:
            paths.insert(0, root)
        return paths

    def resolve_module(self, specifier: str, search_paths: Sequence[str]) -> str:
        """Find the first module file matching a specifier.

        Raises:
            ResolutionError: If no search path contains the module.
        """
        if os.path.isabs(specifier):
            paths = [specifier]
        else:
            relative = specifier_to_path(specifier, self._module_suffix)
            paths = [os.path.join(root, relative) for root in search_paths]

        for path in paths:
            for candidate in module_candidates(path, self._module_suffix):
                if os.path.isfile(candidate):
                    return candidate

        raise ResolutionError(specifier, f"No module found in {len(paths)} search paths")

    def load_module(self, location: str) -> Any:
        """Load the module at a location.

        Raises:
            ResolutionError: If no module file exists at the location.
        """
        path = self._find_file(location)
        if path in self._modules:
            return self._modules[path]

        module = None
        module_name = self._importable_name(path)
        if module_name:
            try:
                module = importlib.import_module(module_name)
            except ImportError as e:
                logger.debug(f"Cannot import {path} as '{module_name}': {e}")
            else:
                if os.path.realpath(getattr(module, "__file__", None) or "") != os.path.realpath(path):
                    # shadowed by another module of the same name
                    module = None
        if module is None:
            module = self._load_from_file(path)

        logger.debug(f"Loaded module {path}")
        self._modules[path] = module
        return module

    def _find_file(self, location: str) -> str:
        for candidate in module_candidates(location, self._module_suffix):
            if os.path.isfile(candidate):
                return os.path.abspath(candidate)
        raise ResolutionError(location, "No module file at this location")

    def _importable_name(self, path: str) -> Optional[str]:
        """Return the dotted name importing ``path``, if the process would import that same file."""
        for entry in sys.path:
            root = os.path.abspath(entry) if entry else os.getcwd()
            if not path.startswith(root + os.sep):
                continue
            relative, extension = os.path.splitext(os.path.relpath(path, root))
            if extension != self._module_suffix:
                continue
            parts = relative.split(os.sep)
            if parts[-1] == "__init__":
                parts.pop()
            if not parts or not all(part.isidentifier() for part in parts):
                continue
            if self._owns_top_level(parts[0], root):
                return ".".join(parts)
        return None

    def _owns_top_level(self, name: str, root: str) -> bool:
        # find_spec on a top-level name locates it without importing it
        try:
            spec = importlib.util.find_spec(name)
        except (ImportError, ValueError):
            return False
        if spec is None:
            return False
        expected = os.path.realpath(os.path.join(root, name))
        if spec.submodule_search_locations:
            return any(os.path.realpath(location) == expected for location in spec.submodule_search_locations)
        return os.path.realpath(spec.origin or "") == expected + self._module_suffix

    def _load_from_file(self, path: str) -> Any:
        stem = os.path.splitext(os.path.basename(path))[0]
        digest = hashlib.sha1(path.encode("utf-8")).hexdigest()[:12]
        module_name = f"_blueprint_{stem}_{digest}"
        if module_name in sys.modules:
            return sys.modules[module_name]

        search_locations = [os.path.dirname(path)] if stem == "__init__" else None
        spec = importlib.util.spec_from_file_location(module_name, path, submodule_search_locations=search_locations)
        if spec is None or spec.loader is None:
            raise ResolutionError(path, "Not a loadable module")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception:
            del sys.modules[module_name]
            raise
        return module

    @staticmethod
    def _package_root(specifier: str) -> Optional[str]:
        top_level = specifier.split("/", 1)[0].split(".", 1)[0]
        if not top_level.isidentifier():
            return None
        try:
            spec = importlib.util.find_spec(top_level)
        except (ImportError, ValueError):
            return None
        if spec is None or not spec.origin or not os.path.isfile(spec.origin):
            return None
        if spec.submodule_search_locations:
            return os.path.dirname(os.path.dirname(spec.origin))
        return os.path.dirname(spec.origin)
