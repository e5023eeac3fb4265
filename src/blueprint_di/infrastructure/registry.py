from types import ModuleType
from typing import Any, Dict, Optional

from blueprint_di.application.export_lookup import select_export
from blueprint_di.domain import ILocationResolver, ResolutionError


class StaticLocationResolver(ILocationResolver):
    """Resolves class specifiers from a fixed registry instead of the file system.

    Registered classes and factory functions are returned as they are. Registered
    modules go through the usual export selection.

    Attributes:
        _registry: Objects by class specifier.

    Example:
        >>> resolver = StaticLocationResolver({"./mailer": SmtpMailer})
        >>> compiler = DocumentCompiler(builder, reader, resolver, environment)
    """

    def __init__(self, registry: Optional[Dict[str, Any]] = None) -> None:
        self._registry: Dict[str, Any] = dict(registry or {})

    def register(self, specifier: str, target: Any) -> None:
        """Register the object a specifier resolves to, replacing any previous one."""
        self._registry[specifier] = target

    def locate(self, specifier: str, base_dir: str, export_name: Optional[str] = None) -> Any:
        """Look a specifier up, ignoring the base directory.

        Raises:
            ResolutionError: If the specifier is not registered.
        """
        if specifier not in self._registry:
            raise ResolutionError(specifier, "Specifier is not registered")
        target = self._registry[specifier]
        if isinstance(target, ModuleType):
            return select_export(target, specifier, export_name)
        return target
