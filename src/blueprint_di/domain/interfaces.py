from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional, Sequence, Union

from blueprint_di.domain.models import Alias, Definition


class IContainerBuilder(ABC):
    """Abstract interface for the store a compilation populates."""

    @property
    @abstractmethod
    def default_dir(self) -> Optional[str]:
        """Directory class specifiers resolve against instead of the document's own."""

    @abstractmethod
    def set_parameter(self, name: str, value: Any) -> None:
        """Set a parameter, replacing any previous value.

        Args:
            name: The parameter name.
            value: The raw parameter value.
        """

    @abstractmethod
    def get_parameter(self, name: str) -> Any:
        """Return a parameter's current value.

        Args:
            name: The parameter name.

        Raises:
            ResolutionError: If the parameter is not set.
        """

    @abstractmethod
    def set_alias(self, alias: str, target: str) -> None:
        """Register a service id that stands for another one."""

    @abstractmethod
    def set_definition(self, service_id: str, definition: Definition) -> None:
        """Register a definition, replacing any previous one under the same id."""


class IEnvironment(ABC):
    """Abstract interface for environment variable lookups."""

    @abstractmethod
    def get(self, name: str) -> Optional[str]:
        """Return the variable's value, or None when it is not set."""


class IFileSystem(ABC):
    """Abstract interface for locating and loading implementation modules."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check whether a file or directory exists at path."""

    @abstractmethod
    def lookup_paths(self, specifier: str) -> List[str]:
        """Return search roots the running process already knows for a module name."""

    @abstractmethod
    def resolve_module(self, specifier: str, search_paths: Sequence[str]) -> str:
        """Find the module a specifier names.

        Args:
            specifier: Absolute path or bare module name.
            search_paths: Candidate roots, the first satisfying one wins.

        Returns:
            The location of the module.

        Raises:
            ResolutionError: If no candidate satisfies the specifier.
        """

    @abstractmethod
    def load_module(self, location: str) -> Any:
        """Load the module at location and return an object exposing its exports.

        Raises:
            ResolutionError: If the location cannot be loaded.
        """


class ILocationResolver(ABC):
    """Abstract interface turning a class specifier into a loadable object."""

    @abstractmethod
    def locate(self, specifier: str, base_dir: str, export_name: Optional[str] = None) -> Any:
        """Resolve a class specifier to the object it names.

        Args:
            specifier: The class specifier as written in a document.
            base_dir: Directory relative specifiers are resolved against.
            export_name: Preferred export name, if any.

        Returns:
            The selected object, or None when the location exports no match.

        Raises:
            ResolutionError: If the specifier cannot be resolved.
        """


class IDocumentReader(ABC):
    """Abstract interface for reading raw service documents."""

    @abstractmethod
    def read(self, location: str) -> Mapping[str, Any]:
        """Read and deserialize the document at location.

        Raises:
            DocumentError: If the document cannot be read or is not a mapping.
        """


CompiledService = Union[Definition, Alias]
