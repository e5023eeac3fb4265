import json
import os
from typing import Any, Dict, Mapping, Optional

import yaml

from blueprint_di.application.value_parser import TAGGED_MARKER
from blueprint_di.domain import DocumentError, IDocumentReader


class _DocumentYamlLoader(yaml.SafeLoader):
    """Safe YAML loader that reads ``!tagged name`` scalars as tagged-collection markers."""


def _construct_tagged(loader: yaml.SafeLoader, node: yaml.Node) -> str:
    return f"{TAGGED_MARKER}{loader.construct_scalar(node)}"


_DocumentYamlLoader.add_constructor("!tagged", _construct_tagged)


def _as_mapping(location: str, raw: Any) -> Mapping[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise DocumentError(f"Service document {location} must contain a mapping, got {type(raw).__name__}")
    return raw


class YamlDocumentReader(IDocumentReader):
    """Reads YAML service documents."""

    def read(self, location: str) -> Mapping[str, Any]:
        try:
            with open(location, encoding="utf-8") as stream:
                raw = yaml.load(stream, Loader=_DocumentYamlLoader)
        except OSError as e:
            raise DocumentError(f"Cannot read service document {location}: {e}") from e
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise DocumentError(f"Invalid YAML in service document {location}: {e}") from e
        return _as_mapping(location, raw)


class JsonDocumentReader(IDocumentReader):
    """Reads JSON service documents."""

    def read(self, location: str) -> Mapping[str, Any]:
        try:
            with open(location, encoding="utf-8") as stream:
                raw = json.load(stream)
        except OSError as e:
            raise DocumentError(f"Cannot read service document {location}: {e}") from e
        except ValueError as e:
            raise DocumentError(f"Invalid JSON in service document {location}: {e}") from e
        return _as_mapping(location, raw)


class ExtensionDocumentReader(IDocumentReader):
    """Dispatches to a reader chosen by the document's file extension.

    Attributes:
        _readers: Readers by lower-case extension, dot included.

    Example:
        >>> reader = ExtensionDocumentReader()
        >>> reader.read("config/services.yml")
        {'services': {...}}
    """

    def __init__(self, readers: Optional[Dict[str, IDocumentReader]] = None) -> None:
        if readers is None:
            yaml_reader = YamlDocumentReader()
            readers = {".yml": yaml_reader, ".yaml": yaml_reader, ".json": JsonDocumentReader()}
        self._readers = readers

    def read(self, location: str) -> Mapping[str, Any]:
        extension = os.path.splitext(location)[1].lower()
        reader = self._readers.get(extension)
        if reader is None:
            supported = ", ".join(sorted(self._readers))
            raise DocumentError(f"Unsupported service document {location}, expected one of: {supported}")
        return reader.read(location)
