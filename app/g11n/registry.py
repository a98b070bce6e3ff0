"""The G11n registry: supported locales, fallback, active locale and cascade.

A registry instance is request scoped. Build one at startup with every locale
registered, then call ``fork()`` per request; forks share the immutable locale
nodes and the translator but keep their own active locale and cascade.

Example:
    g11n = G11n()
    g11n.add_locale(LocaleNode("en"))
    g11n.add_locale(LocaleNode("en_US"))
    g11n.set_translator(MessageTranslator(readers=[YAMLResourceReader()]))

    request_g11n = g11n.fork()
    request_g11n.initialize(accept_language="en-us,en;q=0.8")
    request_g11n.translate("default.greeting")
"""

from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Sequence

from g11n.exceptions import (
    MissingFallbackError,
    MissingLocaleError,
    MissingTranslatorError,
)
from g11n.keys import LocaleFormat, canonicalize
from g11n.locale import LocaleNode
from g11n.logging import get_module_logger
from g11n.models import LocaleChanged
from g11n.resolvers import parse_accept_language

if TYPE_CHECKING:
    from g11n.translator import Translator

logger = get_module_logger()

LocaleListener = Callable[[LocaleChanged], Any]


class G11n:
    """Coordinates locales, the fallback, the active locale and the cascade.

    Attributes:
        _locales: Registered nodes by URL format key, in registration order.
        _arena: Every node created while resolving parents, by key.
        _fallback: Locale consulted last in every cascade.
        _current: Locale active for this request.
        _cascade: Memoized cascade, reset whenever ``_current`` changes.
    """

    def __init__(self):
        self._locales: Dict[str, LocaleNode] = {}
        self._arena: Dict[str, LocaleNode] = {}
        self._fallback: Optional[LocaleNode] = None
        self._current: Optional[LocaleNode] = None
        self._cascade: Optional[List[str]] = None
        self._translator: Optional["Translator"] = None
        self._listeners: List[LocaleListener] = []

    def add_locale(self, locale: LocaleNode) -> LocaleNode:
        """Register a locale and its parents.

        Registration is idempotent: a locale already registered under the same
        key is returned unchanged. The first locale added becomes the fallback
        unless one is already set.

        Args:
            locale: Locale to register.

        Returns:
            The registered node.
        """
        key = canonicalize(locale.code)

        if key in self._locales:
            return self._locales[key]

        # A parent created by an earlier registration is reused
        locale = self._arena.get(key, locale)
        locale.initialize(self._arena)

        self._locales[key] = locale
        logger.info("locale_registered", locale=locale.code, key=key)

        if locale.parent is not None:
            self.add_locale(locale.parent)

        if self._fallback is None:
            self.set_fallback(key)

        return locale

    def set_fallback(self, key: str) -> "G11n":
        """Define the locale used when no other matches.

        Raises:
            MissingLocaleError: If the locale has not been registered.
        """
        key = canonicalize(key)

        if key not in self._locales:
            raise MissingLocaleError(f"Locale {key} has not been setup")

        self._fallback = self._locales[key]
        self._cascade = None
        logger.info("fallback_set", locale=self._fallback.code)
        return self

    def get_fallback(self) -> Optional[LocaleNode]:
        return self._fallback

    def get_locales(self) -> Dict[str, LocaleNode]:
        """Registered locales by URL format key, in registration order."""
        return dict(self._locales)

    def is_enabled(self) -> bool:
        """G11n is enabled once at least one locale has been registered."""
        return len(self._locales) > 0

    def current(self) -> Optional[LocaleNode]:
        """The active locale, or None before detection or use_locale()."""
        return self._current

    def set_translator(self, translator: "Translator") -> "Translator":
        self._translator = translator
        return translator

    def get_translator(self) -> Optional["Translator"]:
        return self._translator

    def on_locale_change(self, listener: LocaleListener) -> Callable[[], None]:
        """Subscribe to locale changes.

        Args:
            listener: Callable receiving a LocaleChanged descriptor.

        Returns:
            A callable that removes the subscription.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def initialize(
        self,
        accept_language: Optional[str] = None,
        preferred: Optional[str] = None,
        tokens: Optional[Sequence[str]] = None,
    ) -> Optional[LocaleNode]:
        """Detect and apply the active locale from client signals.

        A sticky ``preferred`` locale (e.g. a cookie value) wins when it is
        registered. Otherwise the first preference token matching a registered
        key exactly is used, and the fallback when none match.

        Args:
            accept_language: Raw Accept-Language style header.
            preferred: Sticky preference token.
            tokens: Already parsed, lowercased preference tokens. Used instead
                of ``accept_language`` when given.

        Returns:
            The applied locale, or None when g11n is disabled.

        Raises:
            MissingTranslatorError: If no translator has been attached.
        """
        if not self.is_enabled():
            return None

        if tokens is None:
            tokens = parse_accept_language(accept_language)

        selected = None
        if preferred and canonicalize(preferred) in self._locales:
            selected = canonicalize(preferred)
        else:
            for token in tokens:
                if token in self._locales:
                    selected = token
                    break

        if selected is None:
            if self._fallback is None:
                raise MissingFallbackError("No fallback locale has been defined")
            selected = self._fallback.code

        logger.debug("locale_detected", selected=selected, tokens=list(tokens))
        locale = self.use_locale(selected)

        if self._translator is None:
            raise MissingTranslatorError(
                "A translator is required for G11n message parsing"
            )

        return locale

    def use_locale(self, key: str) -> LocaleNode:
        """Make a registered locale the active one.

        Resets the cascade and notifies locale listeners.

        Raises:
            MissingLocaleError: If the locale has not been registered.
        """
        key = canonicalize(key)

        if key not in self._locales:
            raise MissingLocaleError(f"Locale {key} does not exist")

        previous = self._current
        self._current = self._locales[key]
        self._cascade = None

        logger.info(
            "locale_applied",
            locale=self._current.code,
            previous=previous.code if previous else None,
        )
        self._notify(LocaleChanged(previous=previous, current=self._current))
        return self._current

    def _notify(self, event: LocaleChanged) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                logger.error(
                    "locale_listener_failed",
                    listener=getattr(listener, "__name__", "unknown"),
                    locale=event.code,
                    error=str(e),
                )

    def cascade(self) -> List[str]:
        """Locale codes consulted during lookup, most specific first.

        The active locale and its ancestors come first, then the fallback and
        its ancestors, keeping the first occurrence of each code.

        Raises:
            MissingFallbackError: If no fallback has been defined.
        """
        if self._cascade is not None:
            return list(self._cascade)

        if self._fallback is None:
            raise MissingFallbackError("No fallback locale has been defined")

        cycle: List[str] = []
        start = self._current or self._fallback
        for locale in (start, self._fallback):
            for node in locale.ancestors():
                if node.code not in cycle:
                    cycle.append(node.code)

        self._cascade = cycle
        logger.debug("cascade_computed", cascade=cycle)
        return list(cycle)

    def is_(self, key: str) -> bool:
        """Does the active locale match the key, in any format?"""
        if self._current is None:
            return False

        code = self._current.code
        return key == code or canonicalize(key) == canonicalize(code)

    def get_locale(self, key: str) -> LocaleNode:
        """Registered locale by key in any format.

        Raises:
            MissingLocaleError: If the locale has not been registered.
        """
        try:
            return self._locales[canonicalize(key)]
        except KeyError:
            raise MissingLocaleError(f"Locale {key} does not exist") from None

    def locale_for_code(self, code: str) -> LocaleNode:
        """Node for a cascade code, registered or reached as an ancestor."""
        key = canonicalize(code)
        node = self._locales.get(key) or self._arena.get(key)
        if node is None:
            raise MissingLocaleError(f"Locale {code} does not exist")
        return node

    def get_message(self, key: str) -> str:
        """Locate a message through the cascade without formatting it."""
        return self._require_translator().get_message(key, self)

    def translate(self, key: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Locate a message and format it for the active locale.

        Raises:
            MissingTranslatorError: If no translator has been attached.
            MissingMessageError: If the key exists nowhere in the cascade.
        """
        return self._require_translator().translate(key, params, self)

    def _require_translator(self) -> "Translator":
        if self._translator is None:
            raise MissingTranslatorError(
                "A translator is required for G11n message parsing"
            )
        return self._translator

    def fork(self) -> "G11n":
        """Create a request scoped registry sharing this one's locales.

        The fork shares ready locale nodes, the fallback, the translator and
        the listeners, and has its own active locale and cascade.
        """
        forked = G11n()
        forked._locales = dict(self._locales)
        forked._arena = dict(self._arena)
        forked._fallback = self._fallback
        forked._translator = self._translator
        forked._listeners = list(self._listeners)
        return forked
