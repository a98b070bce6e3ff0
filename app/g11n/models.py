"""Data structures shared by the g11n components."""

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Tuple, Union

if TYPE_CHECKING:
    from g11n.locale import LocaleNode

# Fields describing a locale's identity; these are never inherited from a parent
IDENTITY_FIELDS = ("code", "language", "region", "script", "variant")


class LocaleState(Enum):
    """Lifecycle of a LocaleNode."""

    CREATED = "created"
    INITIALIZING = "initializing"
    READY = "ready"


@dataclass(frozen=True)
class LocaleConfig:
    """Typed locale metadata.

    Attributes:
        code: Canonical locale code (e.g., "en_US").
        language: Language tag (e.g., "en").
        region: Region tag (e.g., "US").
        script: Script tag (e.g., "Hans").
        variant: Variant tag.
        parent: Code of the parent locale (e.g., "en" for "en_US").
        iso2: ISO 639-1 language code.
        iso3: ISO 639-2 code or codes.
        timezone: Default timezone name.
        title: Human readable locale name.
        extra: Any other metadata keys found in the locale resource.
    """

    code: str
    language: Optional[str] = None
    region: Optional[str] = None
    script: Optional[str] = None
    variant: Optional[str] = None
    parent: Optional[str] = None
    iso2: Optional[str] = None
    iso3: Optional[Union[str, Tuple[str, ...]]] = None
    timezone: Optional[str] = None
    title: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LocaleConfig":
        """Build a config from a raw metadata mapping.

        Unknown keys are kept in ``extra``. A list of iso3 codes becomes a tuple.

        Raises:
            ValueError: If ``code`` is missing.
        """
        if not data.get("code"):
            raise ValueError("Locale configuration requires a code")

        known = {f.name for f in fields(cls)} - {"extra"}
        values: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}

        for key, value in data.items():
            if key in known:
                values[key] = value
            else:
                extra[key] = value

        if isinstance(values.get("iso3"), list):
            values["iso3"] = tuple(values["iso3"])

        return cls(extra=extra, **values)

    def merged_with(self, parent: "LocaleConfig") -> "LocaleConfig":
        """Return a copy inheriting every unset field from ``parent``.

        The child's own values always win. Identity fields are never inherited.
        """
        inherited: Dict[str, Any] = {}
        for f in fields(self):
            if f.name in IDENTITY_FIELDS or f.name == "extra":
                continue
            if getattr(self, f.name) is None:
                inherited[f.name] = getattr(parent, f.name)

        return replace(self, extra={**parent.extra, **self.extra}, **inherited)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into a plain dict, dropping unset fields."""
        data: Dict[str, Any] = {}
        for f in fields(self):
            if f.name == "extra":
                continue
            value = getattr(self, f.name)
            if value is not None:
                data[f.name] = value
        data.update(self.extra)
        return data


@dataclass(frozen=True)
class ParsedKey:
    """A message key split into domain, catalog and message id.

    Frozen to ensure immutability and hashability for caching.
    """

    domain: str
    catalog: str
    id: str

    def __str__(self) -> str:
        """Return the full dot separated key."""
        return f"{self.domain}.{self.catalog}.{self.id}"


@dataclass(frozen=True)
class LocaleChanged:
    """Descriptor passed to locale listeners when the active locale changes."""

    previous: Optional["LocaleNode"]
    current: "LocaleNode"

    @property
    def code(self) -> str:
        """Code of the newly active locale."""
        return self.current.code
