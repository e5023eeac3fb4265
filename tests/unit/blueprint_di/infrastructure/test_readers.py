"""Unit tests for document readers."""

import json

import pytest

from blueprint_di.domain import DocumentError, IDocumentReader
from blueprint_di.infrastructure.readers import ExtensionDocumentReader, JsonDocumentReader, YamlDocumentReader


class TestYamlDocumentReader:
    """Test cases for YamlDocumentReader."""

    def test_reads_mapping(self, tmp_path):
        """Test that a YAML document is read into a mapping."""
        document = tmp_path / "services.yml"
        document.write_text("parameters:\n  greeting: hi\nservices:\n  log: '@logger'\n", encoding="utf-8")

        assert YamlDocumentReader().read(str(document)) == {
            "parameters": {"greeting": "hi"},
            "services": {"log": "@logger"},
        }

    def test_unquoted_tagged_marker(self, tmp_path):
        """Test that '!tagged name' may be written without quotes."""
        document = tmp_path / "services.yml"
        document.write_text(
            "services:\n  bus:\n    class: ./bus\n    arguments: [!tagged listener, '!tagged quoted']\n",
            encoding="utf-8",
        )

        raw = YamlDocumentReader().read(str(document))

        assert raw["services"]["bus"]["arguments"] == ["!tagged listener", "!tagged quoted"]

    def test_empty_document(self, tmp_path):
        """Test that an empty document reads as an empty mapping."""
        document = tmp_path / "services.yml"
        document.write_text("", encoding="utf-8")

        assert YamlDocumentReader().read(str(document)) == {}

    def test_non_mapping_document(self, tmp_path):
        """Test that a document holding a list is rejected."""
        document = tmp_path / "services.yml"
        document.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(DocumentError, match="must contain a mapping"):
            YamlDocumentReader().read(str(document))

    def test_invalid_yaml(self, tmp_path):
        """Test that malformed YAML raises DocumentError."""
        document = tmp_path / "services.yml"
        document.write_text("services: [unclosed\n", encoding="utf-8")

        with pytest.raises(DocumentError, match="Invalid YAML"):
            YamlDocumentReader().read(str(document))

    def test_missing_file(self, tmp_path):
        """Test that a missing document raises DocumentError."""
        with pytest.raises(DocumentError, match="Cannot read"):
            YamlDocumentReader().read(str(tmp_path / "missing.yml"))

    def test_invalid_utf8(self, tmp_path):
        """Test that a document that is not UTF-8 raises DocumentError."""
        document = tmp_path / "services.yml"
        document.write_bytes(b"services:\n  mailer: '@\xff\xfe'\n")

        with pytest.raises(DocumentError, match="Invalid YAML"):
            YamlDocumentReader().read(str(document))


class TestJsonDocumentReader:
    """Test cases for JsonDocumentReader."""

    def test_reads_mapping(self, tmp_path):
        """Test that a JSON document is read into a mapping."""
        document = tmp_path / "services.json"
        document.write_text(json.dumps({"parameters": {"retries": 3}}), encoding="utf-8")

        assert JsonDocumentReader().read(str(document)) == {"parameters": {"retries": 3}}

    def test_invalid_json(self, tmp_path):
        """Test that malformed JSON raises DocumentError."""
        document = tmp_path / "services.json"
        document.write_text("{", encoding="utf-8")

        with pytest.raises(DocumentError, match="Invalid JSON"):
            JsonDocumentReader().read(str(document))


class TestExtensionDocumentReader:
    """Test cases for ExtensionDocumentReader."""

    def test_reader_implements_interface(self):
        """Test that ExtensionDocumentReader implements IDocumentReader."""
        assert isinstance(ExtensionDocumentReader(), IDocumentReader)

    @pytest.mark.parametrize("name", ["services.yml", "services.yaml", "SERVICES.YML"])
    def test_yaml_extensions(self, tmp_path, name):
        """Test that YAML extensions are dispatched to the YAML reader."""
        document = tmp_path / name
        document.write_text("parameters: {a: 1}\n", encoding="utf-8")

        assert ExtensionDocumentReader().read(str(document)) == {"parameters": {"a": 1}}

    def test_json_extension(self, tmp_path):
        """Test that .json documents are dispatched to the JSON reader."""
        document = tmp_path / "services.json"
        document.write_text('{"parameters": {"a": 1}}', encoding="utf-8")

        assert ExtensionDocumentReader().read(str(document)) == {"parameters": {"a": 1}}

    def test_unsupported_extension(self, tmp_path):
        """Test that unknown extensions are rejected."""
        with pytest.raises(DocumentError, match="Unsupported"):
            ExtensionDocumentReader().read(str(tmp_path / "services.toml"))

    def test_custom_readers(self, tmp_path):
        """Test that readers can be supplied per extension."""
        document = tmp_path / "services.conf"
        document.write_text('{"services": {}}', encoding="utf-8")
        reader = ExtensionDocumentReader({".conf": JsonDocumentReader()})

        assert reader.read(str(document)) == {"services": {}}
