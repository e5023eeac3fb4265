"""Raw document schema.

The records a deserializer produces from a YAML or JSON service document, validated
before compilation. Unknown keys are ignored.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class _RawRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        # YAML renders an empty section as null
        if value is None:
            field = cls.model_fields[info.field_name]
            if field.default_factory is not None:
                return field.default_factory()
        return value


class RawImport(_RawRecord):
    resource: str = Field(..., description="Path of the imported document, relative to the importer.")


class RawFactory(_RawRecord):
    class_: str = Field(..., alias="class", description="Class specifier or '@service' owning the method.")
    method: str = Field(..., description="Name of the factory method.")


class RawCall(_RawRecord):
    method: str
    arguments: List[Any] = Field(default_factory=list)


class RawTag(_RawRecord):
    name: str
    attributes: Optional[Dict[str, Any]] = None


class RawService(_RawRecord):
    """One service record as written in a document."""

    class_: Optional[str] = Field(default=None, alias="class", description="Class specifier.")
    main: Optional[str] = Field(default=None, description="Preferred export name.")
    factory: Optional[RawFactory] = None
    arguments: List[Any] = Field(default_factory=list)
    properties: Dict[str, Any] = Field(default_factory=dict)
    calls: List[RawCall] = Field(default_factory=list)
    tags: List[RawTag] = Field(default_factory=list)
    shared: Optional[bool] = None
    lazy: Optional[bool] = None
    public: Optional[bool] = None
    abstract: Optional[bool] = None
    parent: Optional[str] = None
    decorates: Optional[str] = None
    decoration_priority: Optional[int] = None
    deprecated: Optional[Union[str, bool]] = None
    synthetic: Optional[bool] = None


class RawDocument(_RawRecord):
    """A whole service document: parameters, imports and services."""

    parameters: Dict[str, Any] = Field(default_factory=dict)
    imports: List[RawImport] = Field(default_factory=list)
    services: Dict[str, Union[str, RawService]] = Field(default_factory=dict)
