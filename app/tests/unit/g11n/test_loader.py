"""Tests for g11n.loader module."""

import json

import pytest

from g11n.exceptions import MissingResourceError
from g11n.loader import (
    JSONResourceReader,
    MessageBundle,
    POResourceReader,
    ResourceBundle,
    YAMLResourceReader,
    create_readers,
    flatten,
)
from tests.factories.g11n import write_yaml

PO_CATALOG = """\
msgid ""
msgstr ""
"Content-Type: text/plain; charset=UTF-8\\n"

msgid "greeting"
msgstr "Bonjour"

msgid "untranslated"
msgstr ""

msgid "apple"
msgid_plural "apples"
msgstr[0] "pomme"
msgstr[1] "pommes"
"""


class TestReaders:
    """Tests for the resource readers."""

    def test_yaml_reader(self, tmp_path):
        """YAMLResourceReader parses a mapping."""
        path = write_yaml(tmp_path / "default.yml", {"greeting": "Hello"})
        assert YAMLResourceReader().read(path) == {"greeting": "Hello"}

    def test_yaml_reader_empty_file(self, tmp_path):
        """An empty YAML file reads as an empty mapping."""
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert YAMLResourceReader().read(path) == {}

    def test_yaml_reader_non_mapping(self, tmp_path):
        """A YAML list reads as an empty mapping."""
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n")
        assert YAMLResourceReader().read(path) == {}

    def test_yaml_reader_invalid_raises(self, tmp_path):
        """Malformed YAML raises ValueError."""
        path = tmp_path / "broken.yml"
        path.write_text("greeting: [unclosed\n")
        with pytest.raises(ValueError):
            YAMLResourceReader().read(path)

    def test_json_reader(self, tmp_path):
        """JSONResourceReader parses a mapping."""
        path = tmp_path / "default.json"
        path.write_text(json.dumps({"greeting": "Hello"}))
        assert JSONResourceReader().read(path) == {"greeting": "Hello"}

    def test_json_reader_invalid_raises(self, tmp_path):
        """Malformed JSON raises ValueError."""
        path = tmp_path / "broken.json"
        path.write_text("{greeting")
        with pytest.raises(ValueError):
            JSONResourceReader().read(path)

    def test_po_reader(self, tmp_path):
        """POResourceReader keeps translated entries only."""
        path = tmp_path / "default.po"
        path.write_text(PO_CATALOG, encoding="utf-8")

        messages = POResourceReader().read(path)

        assert messages == {"greeting": "Bonjour", "apple": "pomme"}

    def test_create_readers(self):
        """create_readers() instantiates readers by kind."""
        readers = create_readers(["yaml", "po"])
        assert [type(reader) for reader in readers] == [
            YAMLResourceReader,
            POResourceReader,
        ]

    def test_create_readers_unknown_kind(self):
        """create_readers() rejects unknown kinds."""
        with pytest.raises(ValueError):
            create_readers(["xml"])


class TestResourceBundle:
    """Tests for ResourceBundle."""

    def test_load_missing_resource_is_empty(self, tmp_path):
        """A resource found nowhere loads as an empty mapping."""
        bundle = ResourceBundle([tmp_path], [YAMLResourceReader()])
        assert bundle.load_resource("missing") == {}

    def test_load_without_readers_raises(self, tmp_path):
        """Loading without any reader raises MissingResourceError."""
        bundle = ResourceBundle([tmp_path])
        with pytest.raises(MissingResourceError):
            bundle.load_resource("default")

    def test_later_paths_override_earlier(self, tmp_path):
        """Files are merged in path order."""
        first = tmp_path / "first"
        second = tmp_path / "second"
        write_yaml(first / "default.yml", {"a": "first", "b": "first"})
        write_yaml(second / "default.yml", {"b": "second"})

        bundle = ResourceBundle([first, second], [YAMLResourceReader()])

        assert bundle.load_resource("default") == {"a": "first", "b": "second"}

    def test_multiple_readers(self, tmp_path):
        """Every reader contributes files with its extensions."""
        write_yaml(tmp_path / "default.yml", {"a": "yaml"})
        (tmp_path / "default.json").write_text(json.dumps({"b": "json"}))

        bundle = ResourceBundle([tmp_path])
        bundle.add_reader(YAMLResourceReader()).add_reader(JSONResourceReader())

        assert bundle.load_resource("default") == {"a": "yaml", "b": "json"}

    def test_add_path(self, tmp_path):
        """add_path() extends the search list."""
        write_yaml(tmp_path / "extra" / "default.yml", {"a": "b"})
        bundle = ResourceBundle(readers=[YAMLResourceReader()])
        bundle.add_path(tmp_path / "extra")

        assert bundle.find_files("default")[0][0] == tmp_path / "extra" / "default.yml"


class TestMessageBundle:
    """Tests for MessageBundle."""

    def test_nested_catalogs_are_flattened(self, tmp_path):
        """Nested messages load under dotted ids."""
        write_yaml(
            tmp_path / "format.yml",
            {"relativeTime": {"now": "just now", "ago": "%s ago"}},
        )
        bundle = MessageBundle("core", "en", [tmp_path], [YAMLResourceReader()])

        assert bundle.load_resource("format") == {
            "relativeTime.now": "just now",
            "relativeTime.ago": "%s ago",
        }
        assert bundle.domain == "core"
        assert bundle.locale == "en"


def test_flatten():
    """flatten() joins nested keys with dots."""
    assert flatten({"a": {"b": {"c": 1}}, "d": 2}) == {"a.b.c": 1, "d": 2}
