"""Resource reading and bundles.

A reader parses one file format into a mapping. A bundle owns an ordered list
of directories and loads a named resource from every matching file in them.

Layout of a resource root:

    <root>/locales/<code>/locale.yml         locale metadata
    <root>/locales/<code>/formats.yml        format patterns
    <root>/locales/<code>/inflections.yml    inflection rules
    <root>/locales/<code>/validations.yml    validation rules
    <root>/messages/<code>/<catalog>.yml     default domain catalogs
    <root>/messages/<code>/LC_MESSAGES/<catalog>.po
    <root>/<domain>/messages/<code>/<catalog>.yml
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import yaml
from babel.messages.pofile import read_po

from g11n.exceptions import MissingResourceError
from g11n.logging import get_module_logger

logger = get_module_logger()


class ResourceReader(ABC):
    """Abstract base for resource file readers.

    Attributes:
        extensions: File extensions handled by the reader, without the dot.
    """

    extensions: Tuple[str, ...] = ()

    @abstractmethod
    def read(self, path: Path) -> Dict[str, Any]:
        """Parse a resource file.

        Args:
            path: File to parse.

        Returns:
            Mapping of resource keys to values.

        Raises:
            ValueError: If the file cannot be parsed.
        """
        pass


class YAMLResourceReader(ResourceReader):
    """Reader for YAML resource files."""

    extensions = ("yml", "yaml")

    def read(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error("yaml_parse_error", file=str(path), error=str(e))
            raise ValueError(f"Failed to parse {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning("invalid_resource_format", file=str(path), expected="dict")
            return {}
        return data


class JSONResourceReader(ResourceReader):
    """Reader for JSON resource files."""

    extensions = ("json",)

    def read(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error("json_parse_error", file=str(path), error=str(e))
            raise ValueError(f"Failed to parse {path}: {e}") from e

        if not isinstance(data, dict):
            logger.warning("invalid_resource_format", file=str(path), expected="dict")
            return {}
        return data


class POResourceReader(ResourceReader):
    """Reader for gettext PO catalogs.

    Untranslated entries are skipped. For plural entries the singular id maps
    to the first translated form.
    """

    extensions = ("po",)

    def read(self, path: Path) -> Dict[str, Any]:
        with open(path, "rb") as f:
            catalog = read_po(f)

        messages: Dict[str, Any] = {}
        for message in catalog:
            if not message.id or not message.string:
                continue
            msgid = message.id[0] if isinstance(message.id, tuple) else message.id
            string = (
                message.string[0] if isinstance(message.string, tuple) else message.string
            )
            if string:
                messages[msgid] = string
        return messages


READERS = {
    "yaml": YAMLResourceReader,
    "json": JSONResourceReader,
    "po": POResourceReader,
}


def create_readers(kinds: Iterable[str]) -> List[ResourceReader]:
    """Instantiate readers by kind name.

    Raises:
        ValueError: If a kind is not known.
    """
    readers = []
    for kind in kinds:
        if kind not in READERS:
            raise ValueError(f"Unknown resource reader: {kind}")
        readers.append(READERS[kind]())
    return readers


class ResourceBundle:
    """Loads named resources from an ordered list of directories.

    Every matching file is read and merged in path order, so later paths
    override keys from earlier ones. A resource that exists nowhere loads as
    an empty mapping.

    Attributes:
        paths: Directories searched, in order.
        readers: Readers tried for each directory.
    """

    def __init__(
        self,
        paths: Optional[Sequence[Path]] = None,
        readers: Optional[Sequence[ResourceReader]] = None,
    ):
        self.paths: List[Path] = [Path(path) for path in paths or []]
        self.readers: List[ResourceReader] = list(readers or [])

    def add_path(self, path: Path) -> "ResourceBundle":
        """Append a directory to the search list."""
        self.paths.append(Path(path))
        return self

    def add_reader(self, reader: ResourceReader) -> "ResourceBundle":
        """Attach another reader."""
        self.readers.append(reader)
        return self

    def find_files(self, resource: str) -> List[Tuple[Path, ResourceReader]]:
        """List existing files for a resource with the reader for each."""
        found = []
        for path in self.paths:
            for reader in self.readers:
                for extension in reader.extensions:
                    candidate = path / f"{resource}.{extension}"
                    if candidate.is_file():
                        found.append((candidate, reader))
        return found

    def load_resource(self, resource: str) -> Dict[str, Any]:
        """Load and merge a resource from every matching file.

        Args:
            resource: Resource name without extension (e.g., "formats").

        Returns:
            Merged mapping, empty if no file exists.

        Raises:
            MissingResourceError: If no reader is attached.
        """
        if not self.readers:
            raise MissingResourceError(
                f"No resource reader attached to load {resource}"
            )

        data: Dict[str, Any] = {}
        files = self.find_files(resource)
        for path, reader in files:
            data.update(reader.read(path))

        logger.debug(
            "resource_loaded",
            resource=resource,
            file_count=len(files),
            key_count=len(data),
        )
        return data


class LocaleBundle(ResourceBundle):
    """Bundle for locale metadata, formats, inflections and validations."""

    pass


class MessageBundle(ResourceBundle):
    """Bundle for message catalogs of one (domain, locale) pair.

    Nested catalogs are flattened into dotted message ids.
    """

    def __init__(
        self,
        domain: str,
        locale: str,
        paths: Optional[Sequence[Path]] = None,
        readers: Optional[Sequence[ResourceReader]] = None,
    ):
        super().__init__(paths, readers)
        self.domain = domain
        self.locale = locale

    def load_resource(self, resource: str) -> Dict[str, Any]:
        return flatten(super().load_resource(resource))


def flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flatten nested mappings into dotted keys.

    Example:
        >>> flatten({"relativeTime": {"sec": "%ss"}})
        {'relativeTime.sec': '%ss'}
    """
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(flatten(value, f"{full_key}."))
        else:
            flat[full_key] = value
    return flat
