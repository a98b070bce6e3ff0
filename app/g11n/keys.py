"""Locale key canonicalization.

Locale strings arrive in many shapes (``en-us``, ``EN_us``, ``en-US``). All
comparisons happen after converting them to one of the fixed formats below.
"""

from enum import IntEnum
from functools import lru_cache
from typing import Dict, Mapping, Optional

from babel.core import get_locale_identifier, parse_locale


class LocaleFormat(IntEnum):
    """Possible formats for locale keys.

    FORMAT_1 - en-us (URL format, used for registry keys)
    FORMAT_2 - en-US
    FORMAT_3 - en_US (preferred, used for locale codes)
    FORMAT_4 - enUS
    """

    FORMAT_1 = 1
    FORMAT_2 = 2
    FORMAT_3 = 3
    FORMAT_4 = 4


@lru_cache(maxsize=1024)
def canonicalize(key: str, fmt: LocaleFormat = LocaleFormat.FORMAT_1) -> str:
    """Convert a locale key to one of the canonical formats.

    The language is always lowercased. Everything after the first ``-`` or
    ``_`` is the region, cased and joined according to ``fmt``.

    Args:
        key: Locale key using ``-`` or ``_`` as separator, any casing.
        fmt: Target format.

    Returns:
        Canonical locale key, or the bare language when no region is present.
    """
    language, _, region = key.strip().replace("_", "-").lower().partition("-")
    parts = [part for part in region.split("-") if part]

    if not parts:
        return language

    if fmt == LocaleFormat.FORMAT_1:
        return language + "-" + "-".join(parts)
    if fmt == LocaleFormat.FORMAT_2:
        return language + "-" + "-".join(part.upper() for part in parts)
    if fmt == LocaleFormat.FORMAT_4:
        return language + "".join(part.upper() for part in parts)
    return language + "_" + "_".join(part.upper() for part in parts)


def decompose(code: str) -> Dict[str, str]:
    """Parse a locale code into its language, script, region and variant tags.

    Raises:
        ValueError: If the code is not a syntactically valid locale identifier.
    """
    language, region, script, variant = parse_locale(
        canonicalize(code, LocaleFormat.FORMAT_3)
    )[:4]
    tags = {"language": language, "script": script, "region": region, "variant": variant}
    return {tag: value for tag, value in tags.items() if value}


def compose(tags: Mapping[str, Optional[str]]) -> str:
    """Build a ``_`` delimited locale code from a mapping of tags."""
    return get_locale_identifier(
        (
            tags["language"],
            tags.get("region"),
            tags.get("script"),
            tags.get("variant"),
        ),
        sep="_",
    )
