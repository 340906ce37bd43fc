"""Helpers for user-supplied list filters."""

MAX_SEARCH_LENGTH = 100


def normalize_search(search: str | None, max_length: int = MAX_SEARCH_LENGTH) -> str | None:
    """Trim a free-text search term.

    Args:
        search: Raw search string from the query string
        max_length: Maximum length kept

    Returns:
        The trimmed term, or None when nothing is left to search for
    """
    if search is None:
        return None
    return search[:max_length].strip() or None


def escape_like_wildcards(value: str) -> str:
    """Escape LIKE wildcards so the term matches literally.

    Use together with ``escape="\\\\"`` on the ``like`` / ``ilike`` call.

    Example:
        >>> escape_like_wildcards("50%_off")
        '50\\\\%\\\\_off'
    """
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
