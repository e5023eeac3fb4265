from typing import Any, Dict, List, Optional

from blueprint_di.domain import (
    Definition,
    IContainerBuilder,
    MissingReferenceError,
    ResolutionError,
)


class ContainerBuilder(IContainerBuilder):
    """In-memory store of compiled parameters, aliases and definitions.

    Compilation populates the builder; a container runtime reads it afterwards to
    construct services. Nothing is instantiated here.

    Attributes:
        _parameters: Parameter values by name.
        _aliases: Alias targets by alias id.
        _definitions: Definitions by service id, in registration order.
        _default_dir: Optional directory class specifiers resolve against.
    """

    def __init__(self, default_dir: Optional[str] = None) -> None:
        """Initialize an empty builder.

        Args:
            default_dir: Directory used instead of each document's own directory
                when resolving class specifiers.
        """
        self._parameters: Dict[str, Any] = {}
        self._aliases: Dict[str, str] = {}
        self._definitions: Dict[str, Definition] = {}
        self._default_dir = default_dir

    @property
    def default_dir(self) -> Optional[str]:
        return self._default_dir

    @default_dir.setter
    def default_dir(self, value: Optional[str]) -> None:
        self._default_dir = value

    def set_parameter(self, name: str, value: Any) -> None:
        self._parameters[name] = value

    def get_parameter(self, name: str) -> Any:
        """Return a parameter's current value.

        Raises:
            ResolutionError: If the parameter is not set.
        """
        if name not in self._parameters:
            raise ResolutionError(name, "Parameter is not set")
        return self._parameters[name]

    def has_parameter(self, name: str) -> bool:
        return name in self._parameters

    def get_parameters(self) -> Dict[str, Any]:
        """Get a copy of every parameter."""
        return self._parameters.copy()

    def set_alias(self, alias: str, target: str) -> None:
        """Register an alias, replacing any definition under the same id."""
        self._definitions.pop(alias, None)
        self._aliases[alias] = target

    def get_alias(self, alias: str) -> Optional[str]:
        return self._aliases.get(alias)

    def get_aliases(self) -> Dict[str, str]:
        """Get a copy of the alias table."""
        return self._aliases.copy()

    def set_definition(self, service_id: str, definition: Definition) -> None:
        """Register a definition, replacing any alias or definition under the same id."""
        self._aliases.pop(service_id, None)
        self._definitions[service_id] = definition

    def get_definition(self, service_id: str) -> Definition:
        """Return the definition registered under an id, following aliases.

        Raises:
            MissingReferenceError: If nothing is registered under the id.
        """
        seen = set()
        while service_id in self._aliases and service_id not in seen:
            seen.add(service_id)
            service_id = self._aliases[service_id]
        if service_id not in self._definitions:
            raise MissingReferenceError(service_id)
        return self._definitions[service_id]

    def has_definition(self, service_id: str) -> bool:
        return service_id in self._definitions or service_id in self._aliases

    def get_definitions(self) -> Dict[str, Definition]:
        """Get a copy of the definition table."""
        return self._definitions.copy()

    def find_tagged_service_ids(self, tag: str) -> Dict[str, List[Dict[str, Any]]]:
        """Find every service carrying a tag.

        Args:
            tag: The tag name.

        Returns:
            Attribute mappings of each matching tag, by service id, in registration order.

        Example:
            >>> builder.find_tagged_service_ids("event.listener")
            {'audit_listener': [{'event': 'user.created'}, {'event': 'user.deleted'}]}
        """
        tagged: Dict[str, List[Dict[str, Any]]] = {}
        for service_id, definition in self._definitions.items():
            attributes = [dict(entry.attributes) for entry in definition.tags if entry.name == tag]
            if attributes:
                tagged[service_id] = attributes
        return tagged

    def find_decorators(self, service_id: str) -> List[str]:
        """List the services decorating a service, highest priority first.

        Decorators without a priority count as priority 0. Ties keep registration order.
        """
        decorators = [
            (decorator_id, definition.decoration_priority or 0)
            for decorator_id, definition in self._definitions.items()
            if definition.decorated_service == service_id
        ]
        return [decorator_id for decorator_id, _ in sorted(decorators, key=lambda item: -item[1])]

    def clear(self) -> None:
        """Clear all parameters, aliases and definitions."""
        self._parameters.clear()
        self._aliases.clear()
        self._definitions.clear()
