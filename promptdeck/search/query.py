"""
Query parsing - Validation and prefix toggling for the search entry.

A query may carry "<prefix>:" tokens that scope the search. The tokens are
sent to the matcher verbatim; here they only matter for deciding whether
there is anything left to search for.

Each token is removed at most once per pass (replace-first). Repeating a
token is not a supported way to scope a query, so a second copy survives
and counts as search text.
"""

from promptdeck.search.prefixes import PREFIXES, prefix_token

# Characters trimmed from the edges of a query. Unicode space separators,
# ASCII whitespace, line separators and the byte order mark count; NEL and
# the ASCII file separators do not.
TRIM_CHARS = (
    "\t\n\v\f\r \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def strip_prefixes(query: str) -> str:
    """Remove the first occurrence of every prefix token, in vocabulary order."""
    remaining = query
    for prefix in PREFIXES:
        token = prefix_token(prefix)
        if token in remaining:
            remaining = remaining.replace(token, "", 1)
    return remaining


def is_valid_query(query: str) -> bool:
    """
    Return True if the query has search text beyond its prefix tokens.

    Args:
        query: Raw text from the search entry

    Returns:
        False for empty text and for text made only of prefix tokens
    """
    if not query:
        return False
    return len(strip_prefixes(query).strip(TRIM_CHARS)) > 0


def has_prefix(query: str, prefix: str) -> bool:
    return prefix_token(prefix) in query


def active_prefixes(query: str) -> list[str]:
    """Prefixes present in the query, in vocabulary order."""
    return [prefix for prefix in PREFIXES if has_prefix(query, prefix)]


def toggle_prefix(query: str, prefix: str) -> str:
    """
    Add or remove a prefix token.

    If the token is present its first occurrence is removed, otherwise it
    is prepended. The result is trimmed either way.

    Args:
        query: Current search text
        prefix: One of PREFIXES

    Returns:
        The new search text

    Raises:
        ValueError: If prefix is not a recognised category
    """
    if prefix not in PREFIXES:
        raise ValueError(f"Unknown prefix: {prefix!r}")

    token = prefix_token(prefix)
    if token in query:
        return query.replace(token, "", 1).strip(TRIM_CHARS)
    return f"{token}{query}".strip(TRIM_CHARS)
