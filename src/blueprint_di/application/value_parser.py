import logging
import re
from typing import Any

from blueprint_di.domain import (
    Argument,
    IContainerBuilder,
    IEnvironment,
    LiteralValue,
    ParameterHandle,
    ServiceReference,
    TaggedCollectionReference,
)

logger = logging.getLogger(__name__)

REFERENCE_SIGIL = "@"
OPTIONAL_REFERENCE_SIGIL = "@?"
PARAMETER_SIGIL = "%"
TAGGED_MARKER = "!tagged "

_ENV_PATTERN = re.compile(r"env\((?P<name>[^()]+)\)")


class ValueParser:
    """Classifies raw document values into arguments.

    Strings are classified by their sigils, checked in a fixed order:

    - ``@?name``: optional service reference.
    - ``@name``: service reference.
    - ``%name%``: parameter value, read from the container now.
    - ``%env(NAME)%``: environment variable value, read now.
    - ``%name``: deferred parameter handle.
    - ``!tagged name``: every service carrying the tag ``name``.

    Anything else, booleans included, is a literal. Lists and mappings are parsed
    element by element.

    Attributes:
        _container: Store parameters are interpolated from.
        _environment: Source of environment variables.
    """

    def __init__(self, container: IContainerBuilder, environment: IEnvironment) -> None:
        self._container = container
        self._environment = environment

    def parse(self, value: Any) -> Argument:
        """Parse one raw value.

        Args:
            value: A scalar, list or mapping read from a document.

        Returns:
            The argument, or a list/dict of arguments for structures.

        Raises:
            ResolutionError: If an interpolated parameter is not set.

        Example:
            >>> parser.parse("@?mailer")
            ServiceReference(target='mailer', optional=True)
            >>> parser.parse("%timeout")
            ParameterHandle(name='timeout')
        """
        if isinstance(value, bool):
            return LiteralValue(value=value)
        if isinstance(value, (list, tuple)):
            return [self.parse(item) for item in value]
        if isinstance(value, dict):
            return {key: self.parse(item) for key, item in value.items()}
        if not isinstance(value, str):
            return LiteralValue(value=value)

        if value.startswith(OPTIONAL_REFERENCE_SIGIL):
            return ServiceReference(target=value[len(OPTIONAL_REFERENCE_SIGIL) :], optional=True)
        if value.startswith(REFERENCE_SIGIL):
            return ServiceReference(target=value[len(REFERENCE_SIGIL) :])
        if value.startswith(PARAMETER_SIGIL) and value.endswith(PARAMETER_SIGIL):
            # a lone '%' both opens and closes, naming the empty parameter
            return LiteralValue(value=self._interpolate(value[1:-1]))
        if value.startswith(PARAMETER_SIGIL):
            return ParameterHandle(name=value[len(PARAMETER_SIGIL) :])
        if value.startswith(TAGGED_MARKER):
            return TaggedCollectionReference(tag=value[len(TAGGED_MARKER) :])
        return LiteralValue(value=value)

    def _interpolate(self, expression: str) -> Any:
        """Resolve the interior of a ``%...%`` value."""
        match = _ENV_PATTERN.fullmatch(expression)
        if match:
            name = match.group("name")
            resolved = self._environment.get(name)
            if resolved is None:
                logger.warning(f"Environment variable '{name}' is not set")
            return resolved
        return self._container.get_parameter(expression)
