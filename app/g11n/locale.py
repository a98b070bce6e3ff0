"""Locale nodes: one locale's identity, configuration and resource rules.

A node moves through ``CREATED -> INITIALIZING -> READY``. Initialization
loads the locale metadata, initializes the parent chain up to the root, and
computes the effective configuration once. Ready nodes never change and may be
shared read-only between registries.
"""

from pathlib import Path
from typing import Any, Dict, List, MutableMapping, Optional, Sequence

from g11n.configuration import settings
from g11n.exceptions import LocaleCycleError, LocaleNotInitializedError
from g11n.keys import LocaleFormat, canonicalize, decompose
from g11n.loader import LocaleBundle, ResourceReader, YAMLResourceReader
from g11n.logging import get_module_logger
from g11n.models import LocaleConfig, LocaleState

logger = get_module_logger()

# Resource names inside a locale bundle
FORMATS = "formats"
INFLECTIONS = "inflections"
VALIDATIONS = "validations"


class LocaleNode:
    """A single locale and its place in the fallback chain.

    Attributes:
        code: Canonical locale code (e.g., "en_US").
        resource_paths: Resource roots searched for this locale.
        readers: Readers used for the locale bundle.
        state: Lifecycle state.
    """

    def __init__(
        self,
        code: str,
        config: Optional[Dict[str, Any]] = None,
        resource_paths: Optional[Sequence[Path]] = None,
        readers: Optional[Sequence[ResourceReader]] = None,
    ):
        """Create a locale node.

        Args:
            code: Locale code in any supported format.
            config: Seed configuration; takes precedence over the metadata file.
            resource_paths: Resource roots (default: settings.g11n.resource_roots).
            readers: Locale bundle readers (default: YAML only).
        """
        self.code = canonicalize(code, LocaleFormat.FORMAT_3)
        self.resource_paths: List[Path] = [
            Path(path)
            for path in (
                resource_paths
                if resource_paths is not None
                else settings.g11n.resource_roots
            )
        ]
        self.readers: List[ResourceReader] = (
            list(readers) if readers is not None else [YAMLResourceReader()]
        )
        self.state = LocaleState.CREATED

        self._seed: Dict[str, Any] = dict(config or {})
        self._locale_bundle: Optional[LocaleBundle] = None
        self._own_config: Optional[LocaleConfig] = None
        self._effective_config: Optional[LocaleConfig] = None
        self._parent: Optional["LocaleNode"] = None
        self._resources: Dict[str, Dict[str, Any]] = {}

    def __repr__(self) -> str:
        return f"LocaleNode(code={self.code!r}, state={self.state.value})"

    @property
    def key(self) -> str:
        """Registry key of this locale (URL format, e.g. "en-us")."""
        return canonicalize(self.code, LocaleFormat.FORMAT_1)

    @property
    def is_ready(self) -> bool:
        return self.state is LocaleState.READY

    def initialize(
        self, arena: Optional[MutableMapping[str, "LocaleNode"]] = None
    ) -> "LocaleNode":
        """Load metadata, initialize the parent chain and merge configuration.

        Args:
            arena: Nodes by registry key, shared so that every parent is
                instantiated once. The node and its ancestors are added to it.

        Returns:
            This node, ready.

        Raises:
            LocaleCycleError: If the parent chain loops back on itself.
            MissingResourceError: If no reader is attached.
            ValueError: If a locale resource cannot be parsed. The node is
                reset and may be initialized again.
        """
        if self.state is LocaleState.READY:
            return self
        if self.state is LocaleState.INITIALIZING:
            raise LocaleCycleError(f"Locale {self.code} is its own ancestor")

        arena = arena if arena is not None else {}
        arena.setdefault(self.key, self)
        self.state = LocaleState.INITIALIZING

        try:
            self._locale_bundle = LocaleBundle(
                [root / "locales" / self.code for root in self.resource_paths],
                self.readers,
            )

            data = {**self._locale_bundle.load_resource("locale"), **self._seed}
            data["code"] = self.code
            data = {**locale_tags(self.code), **data}
            self._own_config = LocaleConfig.from_mapping(data)

            if self._own_config.parent:
                self._parent = self._resolve_parent(self._own_config.parent, arena)
                self._effective_config = self._own_config.merged_with(
                    self._parent.effective_config
                )
            else:
                self._effective_config = self._own_config
        except Exception:
            # A failed node can be initialized again once the cause is fixed
            self.state = LocaleState.CREATED
            self._parent = None
            if arena.get(self.key) is self:
                del arena[self.key]
            raise

        self.state = LocaleState.READY
        logger.debug(
            "locale_initialized",
            locale=self.code,
            parent=self._parent.code if self._parent else None,
        )
        return self

    def _resolve_parent(
        self, code: str, arena: MutableMapping[str, "LocaleNode"]
    ) -> "LocaleNode":
        key = canonicalize(code, LocaleFormat.FORMAT_1)
        if key == self.key:
            raise LocaleCycleError(f"Locale {self.code} cannot be its own parent")

        parent = arena.get(key)
        if parent is None:
            parent = LocaleNode(
                code, resource_paths=self.resource_paths, readers=self.readers
            )
            arena[key] = parent

        return parent.initialize(arena)

    def _require_ready(self) -> None:
        if self.state is not LocaleState.READY:
            raise LocaleNotInitializedError(
                f"Locale {self.code} has not been initialized"
            )

    @property
    def parent(self) -> Optional["LocaleNode"]:
        """The parent locale, if the metadata names one."""
        self._require_ready()
        return self._parent

    @property
    def own_config(self) -> LocaleConfig:
        """Configuration declared by this locale alone."""
        self._require_ready()
        return self._own_config

    @property
    def effective_config(self) -> LocaleConfig:
        """Own configuration merged over the parent's effective configuration."""
        self._require_ready()
        return self._effective_config

    @property
    def locale_bundle(self) -> LocaleBundle:
        self._require_ready()
        return self._locale_bundle

    def ancestors(self) -> List["LocaleNode"]:
        """This node followed by its parents up to the root."""
        chain = []
        node: Optional[LocaleNode] = self
        while node is not None:
            chain.append(node)
            node = node.parent
        return chain

    def message_paths(
        self, domain: str, default_domain: Optional[str] = None
    ) -> List[Path]:
        """Directories holding this locale's message catalogs for a domain."""
        default_domain = default_domain or settings.g11n.DEFAULT_DOMAIN
        paths = []
        for root in self.resource_paths:
            if domain == default_domain:
                base = root / "messages" / self.code
            else:
                base = root / domain / "messages" / self.code
            paths.extend([base, base / "LC_MESSAGES"])
        return paths

    def get_format_patterns(self, key: Optional[str] = None) -> Any:
        """Format patterns (dates, phone masks, currency), or one entry by key."""
        return lookup(self._load_resource(FORMATS), key)

    def get_inflection_rules(self, key: Optional[str] = None) -> Any:
        """Inflection rules (plurals, ordinals, transliteration), or one entry."""
        return lookup(self._load_resource(INFLECTIONS), key)

    def get_validation_rules(self, key: Optional[str] = None) -> Any:
        """Validation regexes (phone, postal code, ssn), or one entry."""
        return lookup(self._load_resource(VALIDATIONS), key)

    def _load_resource(self, resource: str) -> Dict[str, Any]:
        """Load a resource merged over the parent's, caching it on first use.

        Top level keys of this locale fully replace the parent's.
        """
        self._require_ready()
        if resource not in self._resources:
            data = self._locale_bundle.load_resource(resource)
            if self._parent is not None:
                data = {**self._parent._load_resource(resource), **data}
            self._resources[resource] = data
        return self._resources[resource]


def lookup(data: Dict[str, Any], key: Optional[str]) -> Any:
    """Read a dotted path from nested mappings.

    Returns the whole mapping when key is None, and None when the path does not
    exist.
    """
    if key is None:
        return data

    if key in data:
        return data[key]

    value: Any = data
    for part in key.split("."):
        if not isinstance(value, dict):
            return None
        if part in value:
            value = value[part]
        elif part.isdigit() and int(part) in value:
            value = value[int(part)]
        else:
            return None
    return value


def locale_tags(code: str) -> Dict[str, str]:
    """Language, script, region and variant tags of a locale code.

    Codes Babel cannot parse (``ja_JP_JP``, ``en_USA``, private use tags) fall
    back to the language and the first subtag as region.
    """
    try:
        return decompose(code)
    except ValueError:
        language, _, rest = canonicalize(code, LocaleFormat.FORMAT_3).partition("_")
        region = rest.split("_")[0]
        logger.debug("locale_tags_fallback", locale=code, language=language)
        if region:
            return {"language": language, "region": region}
        return {"language": language}
