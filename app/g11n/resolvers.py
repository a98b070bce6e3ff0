"""Client locale preference parsing.

Turns an Accept-Language style header into the ordered, lowercased tokens the
registry matches against its registered locale keys.
"""

from typing import List, Optional

from g11n.logging import get_module_logger

logger = get_module_logger()


def parse_accept_language(header: Optional[str]) -> List[str]:
    """Split a header into preference tokens.

    The header is lowercased and truncated at the first ``;`` (dropping the
    first weight and everything after it) before splitting on ``,``.

    Example:
        >>> parse_accept_language("en-US,en;q=0.9,fr;q=0.8")
        ['en-us', 'en']

    Args:
        header: Accept-Language header value.

    Returns:
        Tokens in preference order, empty when the header is missing.
    """
    if not header:
        return []

    header = header.lower()
    if ";" in header:
        header = header.split(";", 1)[0]

    tokens = [token.strip() for token in header.split(",")]
    tokens = [token for token in tokens if token]

    logger.debug("parsed_accept_language", tokens=tokens)
    return tokens
