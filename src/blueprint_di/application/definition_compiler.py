from typing import Any, Dict, List, Optional, Tuple, Union

from blueprint_di.application.value_parser import REFERENCE_SIGIL, ValueParser
from blueprint_di.domain import (
    Alias,
    ClassImplementation,
    CompiledService,
    Definition,
    DocumentError,
    FactoryImplementation,
    IContainerBuilder,
    ILocationResolver,
    MethodCall,
    RawCall,
    RawService,
    RawTag,
    Tag,
)


class DefinitionCompiler:
    """Compiles one raw service record into a definition or an alias.

    Attributes:
        _container: Supplies the default class directory.
        _location_resolver: Resolves class specifiers to classes.
        _value_parser: Parses arguments, properties and call arguments.
    """

    def __init__(
        self,
        container: IContainerBuilder,
        location_resolver: ILocationResolver,
        value_parser: ValueParser,
    ) -> None:
        self._container = container
        self._location_resolver = location_resolver
        self._value_parser = value_parser

    def compile(self, service_id: str, service: Union[str, RawService], base_dir: str) -> CompiledService:
        """Compile a service record.

        Args:
            service_id: Id the service is declared under, used in error messages.
            service: A ``@target`` alias string or a service record.
            base_dir: Directory of the document declaring the service.

        Returns:
            An Alias for alias strings, otherwise a factory-backed, synthetic or
            class-backed Definition.

        Raises:
            DocumentError: If the record is neither an alias, a factory, synthetic
                nor declares a class.
            ResolutionError: If a class or parameter cannot be resolved.
        """
        if isinstance(service, str):
            if not service.startswith(REFERENCE_SIGIL):
                raise DocumentError(f"Service '{service_id}': alias '{service}' must start with '{REFERENCE_SIGIL}'")
            return Alias(target=service[len(REFERENCE_SIGIL) :])

        if service.factory is not None:
            return self._compile_factory(service, base_dir)

        if service.synthetic:
            return Definition(synthetic=True)

        if not service.class_:
            raise DocumentError(f"Service '{service_id}' declares neither a class, a factory nor synthetic")
        return self._compile_class(service, base_dir)

    def _compile_factory(self, service: RawService, base_dir: str) -> Definition:
        factory = service.factory
        if factory.class_.startswith(REFERENCE_SIGIL):
            target = self._value_parser.parse(factory.class_)
        else:
            target = self._locate(factory.class_, base_dir)

        return Definition(
            implementation=FactoryImplementation(target=target, method=factory.method),
            shared=_flag(service.shared, True),
            arguments=self._parse_arguments(service.arguments),
        )

    def _compile_class(self, service: RawService, base_dir: str) -> Definition:
        abstract = _flag(service.abstract, False)
        arguments = self._parse_arguments(service.arguments)

        return Definition(
            implementation=ClassImplementation(
                cls=self._locate(service.class_, base_dir, service.main),
                specifier=service.class_,
                export_name=service.main,
            ),
            arguments=() if abstract else arguments,
            appended_arguments=arguments if abstract else (),
            properties=self._parse_properties(service.properties),
            method_calls=self._parse_calls(service.calls),
            tags=self._parse_tags(service.tags),
            shared=_flag(service.shared, True),
            lazy=_flag(service.lazy, False),
            # only an explicit false hides a service
            public=service.public is not False,
            abstract=abstract,
            deprecated=service.deprecated,
            parent=service.parent,
            decorated_service=service.decorates,
            decoration_priority=service.decoration_priority,
        )

    def _locate(self, specifier: str, base_dir: str, export_name: Optional[str] = None) -> Any:
        directory = self._container.default_dir or base_dir
        return self._location_resolver.locate(specifier, directory, export_name)

    def _parse_arguments(self, arguments: List[Any]) -> Tuple[Any, ...]:
        return tuple(self._value_parser.parse(argument) for argument in arguments)

    def _parse_properties(self, properties: Dict[str, Any]) -> Dict[str, Any]:
        return {name: self._value_parser.parse(value) for name, value in properties.items()}

    def _parse_calls(self, calls: List[RawCall]) -> Tuple[MethodCall, ...]:
        return tuple(
            MethodCall(method=call.method, arguments=self._parse_arguments(call.arguments)) for call in calls
        )

    @staticmethod
    def _parse_tags(tags: List[RawTag]) -> Tuple[Tag, ...]:
        return tuple(Tag(name=tag.name, attributes=dict(tag.attributes or {})) for tag in tags)


def _flag(value: Any, default: bool) -> bool:
    return default if value is None else bool(value)
