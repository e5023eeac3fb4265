"""Unit tests for DefinitionCompiler."""

from unittest.mock import Mock

import pytest

from blueprint_di.application.container_builder import ContainerBuilder
from blueprint_di.application.definition_compiler import DefinitionCompiler
from blueprint_di.application.value_parser import ValueParser
from blueprint_di.domain import (
    Alias,
    ClassImplementation,
    Definition,
    DocumentError,
    FactoryImplementation,
    ILocationResolver,
    ImplementationKind,
    LiteralValue,
    MethodCall,
    ParameterHandle,
    RawService,
    ServiceReference,
    Tag,
    TaggedCollectionReference,
)
from blueprint_di.infrastructure.testing import StaticEnvironment


class Mailer:
    pass


class ConnectionFactory:
    pass


@pytest.fixture
def container():
    builder = ContainerBuilder()
    builder.set_parameter("sender", "noreply@example.com")
    return builder


@pytest.fixture
def location_resolver():
    resolver = Mock(spec=ILocationResolver)
    resolver.locate.return_value = Mailer
    return resolver


@pytest.fixture
def compiler(container, location_resolver):
    return DefinitionCompiler(container, location_resolver, ValueParser(container, StaticEnvironment()))


def record(**fields):
    return RawService.model_validate(fields)


class TestAliases:
    """Test cases for alias strings."""

    def test_reference_string_becomes_alias(self, compiler, location_resolver):
        """Test that '@target' compiles to an alias and resolves nothing."""
        compiled = compiler.compile("mail", "@mailer", "/app")

        assert compiled == Alias(target="mailer")
        location_resolver.locate.assert_not_called()

    def test_plain_string_is_rejected(self, compiler):
        """Test that a string without the reference sigil is an error."""
        with pytest.raises(DocumentError, match="must start with '@'"):
            compiler.compile("mail", "mailer", "/app")


class TestFactoryDefinitions:
    """Test cases for factory-backed definitions."""

    def test_factory_on_service(self, compiler, location_resolver):
        """Test that '@service' factories reference the service."""
        compiled = compiler.compile(
            "connection",
            record(factory={"class": "@connection_factory", "method": "create"}, arguments=["%sender%"]),
            "/app",
        )

        assert compiled.kind == ImplementationKind.FACTORY
        assert compiled.implementation == FactoryImplementation(
            target=ServiceReference(target="connection_factory"), method="create"
        )
        assert compiled.arguments == (LiteralValue(value="noreply@example.com"),)
        location_resolver.locate.assert_not_called()

    def test_factory_on_optional_service(self, compiler):
        """Test that '@?service' factories reference the service optionally."""
        compiled = compiler.compile("connection", record(factory={"class": "@?pool", "method": "get"}), "/app")

        assert compiled.implementation.target == ServiceReference(target="pool", optional=True)

    def test_factory_on_class(self, compiler, location_resolver):
        """Test that other factory classes are located."""
        location_resolver.locate.return_value = ConnectionFactory

        compiled = compiler.compile(
            "connection", record(factory={"class": "./connection_factory", "method": "create"}), "/app"
        )

        assert compiled.implementation.target is ConnectionFactory
        assert compiled.implementation.method == "create"
        location_resolver.locate.assert_called_once_with("./connection_factory", "/app", None)

    def test_factory_shared_flag(self, compiler):
        """Test that factories carry the shared flag, defaulting to shared."""
        shared = compiler.compile("a", record(factory={"class": "@f", "method": "m"}), "/app")
        not_shared = compiler.compile("b", record(factory={"class": "@f", "method": "m"}, shared=False), "/app")

        assert shared.shared is True
        assert not_shared.shared is False

    def test_factory_wins_over_synthetic(self, compiler):
        """Test that a factory is compiled even when synthetic is set."""
        compiled = compiler.compile("a", record(factory={"class": "@f", "method": "m"}, synthetic=True), "/app")

        assert compiled.kind == ImplementationKind.FACTORY


class TestSyntheticDefinitions:
    """Test cases for synthetic definitions."""

    def test_synthetic_definition_is_empty(self, compiler, location_resolver):
        """Test that synthetic services carry nothing but the flag."""
        compiled = compiler.compile(
            "request",
            record(synthetic=True, **{"class": "./request"}, arguments=["@a"], tags=[{"name": "t"}]),
            "/app",
        )

        assert compiled == Definition(synthetic=True)
        location_resolver.locate.assert_not_called()


class TestClassDefinitions:
    """Test cases for class-backed definitions."""

    def test_class_is_located_against_document_directory(self, compiler, location_resolver):
        """Test that the class specifier and preferred export are passed on."""
        compiled = compiler.compile("mailer", record(**{"class": "./mailer"}, main="SmtpMailer"), "/app/config")

        assert compiled.implementation == ClassImplementation(
            cls=Mailer, specifier="./mailer", export_name="SmtpMailer"
        )
        location_resolver.locate.assert_called_once_with("./mailer", "/app/config", "SmtpMailer")

    def test_default_directory_overrides_document_directory(self, container, compiler, location_resolver):
        """Test that a configured default directory is used for class resolution."""
        container.default_dir = "/srv/shared"

        compiler.compile("mailer", record(**{"class": "./mailer"}), "/app/config")

        location_resolver.locate.assert_called_once_with("./mailer", "/srv/shared", None)

    def test_missing_class_is_rejected(self, compiler):
        """Test that a record without class, factory or synthetic fails."""
        with pytest.raises(DocumentError, match="'mailer'"):
            compiler.compile("mailer", record(arguments=["@a"]), "/app")

    def test_flag_defaults(self, compiler):
        """Test the defaults applied to unset flags."""
        compiled = compiler.compile("mailer", record(**{"class": "./mailer"}), "/app")

        assert compiled.shared is True
        assert compiled.lazy is False
        assert compiled.public is True
        assert compiled.abstract is False
        assert compiled.deprecated is None
        assert compiled.parent is None
        assert compiled.decorated_service is None
        assert compiled.decoration_priority is None

    def test_only_explicit_false_hides_service(self, compiler):
        """Test that public is true unless explicitly false."""
        hidden = compiler.compile("a", record(**{"class": "./a"}, public=False), "/app")
        shown = compiler.compile("b", record(**{"class": "./b"}, public=True), "/app")

        assert hidden.public is False
        assert shown.public is True

    def test_flags_are_copied(self, compiler):
        """Test that every lifecycle flag is copied onto the definition."""
        compiled = compiler.compile(
            "mailer",
            record(
                **{"class": "./mailer"},
                shared=False,
                lazy=True,
                parent="base_mailer",
                decorates="legacy_mailer",
                decoration_priority=10,
                deprecated="Use mailer.v2 instead",
            ),
            "/app",
        )

        assert compiled.shared is False
        assert compiled.lazy is True
        assert compiled.parent == "base_mailer"
        assert compiled.decorated_service == "legacy_mailer"
        assert compiled.decoration_priority == 10
        assert compiled.deprecated == "Use mailer.v2 instead"

    def test_arguments_are_parsed(self, compiler):
        """Test that constructor arguments are classified."""
        compiled = compiler.compile(
            "mailer",
            record(**{"class": "./mailer"}, arguments=["@transport", "%sender%", "%retries", "!tagged filter", 3]),
            "/app",
        )

        assert compiled.arguments == (
            ServiceReference(target="transport"),
            LiteralValue(value="noreply@example.com"),
            ParameterHandle(name="retries"),
            TaggedCollectionReference(tag="filter"),
            LiteralValue(value=3),
        )
        assert compiled.appended_arguments == ()

    def test_abstract_arguments_are_appended_arguments(self, compiler):
        """Test that abstract definitions keep their arguments apart."""
        compiled = compiler.compile(
            "base_mailer", record(**{"class": "./mailer"}, abstract=True, arguments=["@logger", "%sender%"]), "/app"
        )

        assert compiled.abstract is True
        assert compiled.arguments == ()
        assert compiled.appended_arguments == (
            ServiceReference(target="logger"),
            LiteralValue(value="noreply@example.com"),
        )

    def test_properties_are_parsed(self, compiler):
        """Test that property values are classified."""
        compiled = compiler.compile(
            "mailer", record(**{"class": "./mailer"}, properties={"logger": "@?logger", "retries": 3}), "/app"
        )

        assert compiled.properties == {
            "logger": ServiceReference(target="logger", optional=True),
            "retries": LiteralValue(value=3),
        }

    def test_calls_keep_declaration_order(self, compiler):
        """Test that method calls are kept in order with parsed arguments."""
        compiled = compiler.compile(
            "mailer",
            record(
                **{"class": "./mailer"},
                calls=[
                    {"method": "setTransport", "arguments": ["@transport"]},
                    {"method": "enable"},
                    {"method": "setTransport", "arguments": ["@fallback"]},
                ],
            ),
            "/app",
        )

        assert compiled.method_calls == (
            MethodCall(method="setTransport", arguments=(ServiceReference(target="transport"),)),
            MethodCall(method="enable"),
            MethodCall(method="setTransport", arguments=(ServiceReference(target="fallback"),)),
        )

    def test_duplicate_tags_are_all_kept(self, compiler):
        """Test that tags with the same name are distinct entries."""
        compiled = compiler.compile(
            "listener",
            record(
                **{"class": "./mailer"},
                tags=[
                    {"name": "event.listener", "attributes": {"event": "user.created"}},
                    {"name": "event.listener", "attributes": {"event": "user.deleted"}},
                    {"name": "mailer"},
                ],
            ),
            "/app",
        )

        assert compiled.tags == (
            Tag(name="event.listener", attributes={"event": "user.created"}),
            Tag(name="event.listener", attributes={"event": "user.deleted"}),
            Tag(name="mailer", attributes={}),
        )

    def test_absent_class_export_is_kept(self, compiler, location_resolver):
        """Test that a module without a matching export still compiles."""
        location_resolver.locate.return_value = None

        compiled = compiler.compile("mailer", record(**{"class": "./mailer"}), "/app")

        assert compiled.implementation.cls is None
        assert compiled.kind == ImplementationKind.CLASS
