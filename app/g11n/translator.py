"""Message translators.

A translator locates a message by walking the registry's cascade: for each
locale it checks the catalog cache, then the message bundle, and returns the
first match. Only an exhausted cascade is an error.

The registry is passed to every lookup, so one translator instance (and its
caches) can serve any number of request scoped registries.
"""

import re
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence, Tuple

from g11n.cache import Cache
from g11n.configuration import settings
from g11n.exceptions import InvalidCatalogError, MissingMessageError
from g11n.formatting import BabelMessageFormatter, MessageFormatter, Params
from g11n.loader import MessageBundle, ResourceReader
from g11n.logging import get_module_logger
from g11n.models import ParsedKey

if TYPE_CHECKING:
    from g11n.registry import G11n

logger = get_module_logger()

INVALID_KEY_CHARS = re.compile(r"[^-A-Za-z0-9.]+")


class Translator(ABC):
    """Base translator: key parsing, reader and storage plumbing, formatting.

    Attributes:
        readers: Readers attached to every message bundle.
        storage: Optional shared catalog cache.
        formatter: Formatter applied by translate().
        default_domain: Domain used for two segment keys.
    """

    def __init__(
        self,
        readers: Optional[Sequence[ResourceReader]] = None,
        storage: Optional[Cache] = None,
        formatter: Optional[MessageFormatter] = None,
        default_domain: Optional[str] = None,
    ):
        self.readers = list(readers or [])
        self.storage = storage
        self.formatter = formatter or BabelMessageFormatter()
        self.default_domain = default_domain or settings.g11n.DEFAULT_DOMAIN
        self._parsed: Dict[str, ParsedKey] = {}

    def add_reader(self, reader: ResourceReader) -> "Translator":
        self.readers.append(reader)
        return self

    def set_storage(self, storage: Cache) -> "Translator":
        self.storage = storage
        return self

    def parse_key(self, key: str) -> ParsedKey:
        """Parse out the domain, catalog and id of a message key.

        Characters other than letters, digits, ``-`` and ``.`` are stripped
        first. Two segments are ``catalog.id`` in the default domain; three or
        more are ``domain.catalog.id`` where the id keeps any further dots.

        Raises:
            InvalidCatalogError: If the key has fewer than two segments.
        """
        if key in self._parsed:
            return self._parsed[key]

        parts = INVALID_KEY_CHARS.sub("", key).split(".")

        if len(parts) < 2:
            raise InvalidCatalogError(f"No domain or catalog present for {key} key")

        if len(parts) == 2:
            parsed = ParsedKey(self.default_domain, parts[0], parts[1])
        else:
            parsed = ParsedKey(parts[0], parts[1], ".".join(parts[2:]))

        self._parsed[key] = parsed
        return parsed

    @abstractmethod
    def get_message(self, key: str, g11n: "G11n") -> str:
        """Locate the message for a key through the registry's cascade.

        Raises:
            InvalidCatalogError: If the key cannot be parsed.
            MissingMessageError: If no locale in the cascade has the message.
        """
        pass

    def translate(self, key: str, params: Params, g11n: "G11n") -> str:
        """Locate a message and format it for the active locale.

        Formatting errors propagate unchanged.
        """
        message = self.get_message(key, g11n)
        locale = g11n.current() or g11n.get_fallback()
        return self.formatter.format(locale.code, message, params)


class MessageTranslator(Translator):
    """Translator reading message catalogs from resource bundles.

    Attributes:
        _bundles: One bundle per (domain, locale, resource roots).
        _messages: Located messages by (cascade with each locale's roots, key).
    """

    def __init__(
        self,
        readers: Optional[Sequence[ResourceReader]] = None,
        storage: Optional[Cache] = None,
        formatter: Optional[MessageFormatter] = None,
        default_domain: Optional[str] = None,
    ):
        super().__init__(readers, storage, formatter, default_domain)
        self._bundles: Dict[Tuple[str, str, Tuple[Path, ...]], MessageBundle] = {}
        self._messages: Dict[
            Tuple[Tuple[Tuple[str, Tuple[Path, ...]], ...], str], str
        ] = {}
        self._lock = threading.Lock()

    def load_bundle(self, domain: str, locale: str, g11n: "G11n") -> MessageBundle:
        """Message bundle for a domain and locale, created once per resource roots."""
        node = g11n.locale_for_code(locale)
        bundle_key = (domain, locale, tuple(node.resource_paths))
        bundle = self._bundles.get(bundle_key)
        if bundle is None:
            bundle = MessageBundle(
                domain, locale, node.message_paths(domain, self.default_domain), self.readers
            )
            with self._lock:
                bundle = self._bundles.setdefault(bundle_key, bundle)
        return bundle

    def get_message(self, key: str, g11n: "G11n") -> str:
        cascade = tuple(g11n.cascade())
        # Registries over different resource trees may share this translator
        scope = tuple(
            (code, tuple(g11n.locale_for_code(code).resource_paths)) for code in cascade
        )
        memo_key = (scope, key)

        if memo_key in self._messages:
            return self._messages[memo_key]

        parsed = self.parse_key(key)

        for locale in cascade:
            cache_key = f"g11n.{parsed.domain}.{parsed.catalog}.{locale}"
            messages: Dict[str, Any] = {}

            if self.storage is not None:
                messages = self.storage.get(cache_key) or {}
                if messages:
                    logger.debug("message_cache_hit", cache_key=cache_key)

            if not messages:
                bundle = self.load_bundle(parsed.domain, locale, g11n)
                messages = bundle.load_resource(parsed.catalog)

                if not messages:
                    logger.debug(
                        "catalog_not_found",
                        domain=parsed.domain,
                        catalog=parsed.catalog,
                        locale=locale,
                    )
                    continue

                if self.storage is not None:
                    self.storage.set(cache_key, messages)

            if parsed.id in messages:
                message = str(messages[parsed.id])
                self._messages[memo_key] = message
                return message

        logger.warning("message_not_found", key=key, locales=list(cascade))
        raise MissingMessageError(key, cascade)
