from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from blueprint_di.domain.enums import ImplementationKind


class LiteralValue(BaseModel):
    """A raw value passed through unchanged, or an interpolated parameter's value.

    Attributes:
        value: The literal value.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: Any = Field(..., description="The literal value.")


class ServiceReference(BaseModel):
    """Points at another service by id.

    Attributes:
        target: Id of the referenced service.
        optional: Resolve to an absent value instead of failing when undefined.
    """

    model_config = ConfigDict(frozen=True)

    target: str = Field(..., description="Id of the referenced service.")
    optional: bool = Field(default=False, description="Whether the reference may be absent.")


class ParameterHandle(BaseModel):
    """Deferred handle to a parameter, read by the container at use time.

    Attributes:
        name: The parameter name.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="The parameter name.")


class TaggedCollectionReference(BaseModel):
    """Resolves at runtime to every service carrying a tag.

    Attributes:
        tag: The tag name.
    """

    model_config = ConfigDict(frozen=True)

    tag: str = Field(..., description="The tag name.")


Argument = Union[LiteralValue, ServiceReference, ParameterHandle, TaggedCollectionReference, List[Any], Dict[str, Any]]


class Alias(BaseModel):
    """A service id standing for another service id."""

    model_config = ConfigDict(frozen=True)

    target: str = Field(..., description="Id of the aliased service.")


class ClassImplementation(BaseModel):
    """Class-backed implementation.

    Attributes:
        cls: The selected export, None when the module exports no match.
        specifier: The class specifier as written in the document.
        export_name: Preferred export name, if any.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    cls: Optional[Any] = Field(default=None, description="The resolved class or callable.")
    specifier: str = Field(..., description="The class specifier as written in the document.")
    export_name: Optional[str] = Field(default=None, description="Preferred export name.")


class FactoryImplementation(BaseModel):
    """Factory-backed implementation.

    Attributes:
        target: A ServiceReference or a resolved class owning the factory method.
        method: Name of the factory method.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    target: Any = Field(..., description="Service reference or class owning the factory method.")
    method: str = Field(..., description="Name of the factory method.")


class MethodCall(BaseModel):
    """A method invoked after construction, with its parsed arguments."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    method: str = Field(..., description="Name of the method to call.")
    arguments: Tuple[Any, ...] = Field(default=(), description="Parsed positional arguments.")


class Tag(BaseModel):
    """A named, attributed label attached to a definition."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="The tag name.")
    attributes: Dict[str, Any] = Field(default_factory=dict, description="Tag attributes.")


class Definition(BaseModel):
    """Compiled recipe for constructing and wiring one service.

    A definition is immutable once built. Re-registering a service id replaces the
    whole definition.

    Attributes:
        implementation: Class or factory implementation, None when synthetic.
        arguments: Parsed positional constructor arguments.
        appended_arguments: Arguments an abstract definition appends to its children's.
        properties: Parsed values set on the instance after construction.
        method_calls: Calls made after properties are set, in declaration order.
        tags: Tags in declaration order, duplicates included.
        shared: One instance per container.
        lazy: Defer construction until first use.
        public: Visible outside the defining document.
        abstract: Exists only to be extended.
        synthetic: Value is injected externally at runtime.
        deprecated: Deprecation message, or a falsy value.
        parent: Id of the abstract definition this one extends.
        decorated_service: Id of the service this definition decorates.
        decoration_priority: Order among decorators of the same service.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    implementation: Optional[Union[ClassImplementation, FactoryImplementation]] = Field(
        default=None,
        description="How the object is produced, None for synthetic definitions.",
    )
    arguments: Tuple[Any, ...] = Field(default=(), description="Parsed constructor arguments.")
    appended_arguments: Tuple[Any, ...] = Field(
        default=(),
        description="Arguments appended to a child's own arguments when this definition is abstract.",
    )
    properties: Dict[str, Any] = Field(default_factory=dict, description="Parsed property values.")
    method_calls: Tuple[MethodCall, ...] = Field(default=(), description="Post-construction method calls.")
    tags: Tuple[Tag, ...] = Field(default=(), description="Attached tags.")
    shared: bool = True
    lazy: bool = False
    public: bool = True
    abstract: bool = False
    synthetic: bool = False
    deprecated: Optional[Union[str, bool]] = None
    parent: Optional[str] = None
    decorated_service: Optional[str] = None
    decoration_priority: Optional[int] = None

    @model_validator(mode="after")
    def _check_implementation(self) -> "Definition":
        if self.synthetic:
            if self.implementation is not None:
                raise ValueError("A synthetic definition cannot have an implementation.")
            if self.arguments or self.appended_arguments or self.properties or self.method_calls or self.tags:
                raise ValueError("A synthetic definition cannot carry arguments, properties, calls or tags.")
        elif self.implementation is None:
            raise ValueError("A non-synthetic definition requires a class or factory implementation.")
        return self

    @property
    def kind(self) -> ImplementationKind:
        """How this definition produces its object."""
        if self.synthetic:
            return ImplementationKind.SYNTHETIC
        if isinstance(self.implementation, FactoryImplementation):
            return ImplementationKind.FACTORY
        return ImplementationKind.CLASS
