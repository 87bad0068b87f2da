"""Falsey-value handling for layout references.

A layout reference can mean three things:

- "use the default layout" (``None`` or ``True``)
- "use no layout at all" (``False``, ``""``, ``0``, empty collections, or a
  falsey keyword such as ``"no"`` or ``"nil"``)
- "use this layout" (any other value, taken as a layout name)
"""

from collections.abc import Collection, Iterable

DEFAULT_FALSEY_KEYWORDS: tuple[str, ...] = (
    "false",
    "null",
    "nil",
    "no",
    "none",
    "nope",
    "nada",
    "0",
)


def is_falsey(value: object, keywords: Iterable[str] = DEFAULT_FALSEY_KEYWORDS) -> bool:
    """Return True if ``value`` should be read as "no".

    Args:
        value: The value to test.
        keywords: Strings that count as falsey, compared case-insensitively
            after stripping whitespace.

    Returns:
        True for ``False``, ``None``, zero, empty strings and collections, and
        strings matching one of ``keywords``.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        stripped = value.strip().lower()
        return not stripped or stripped in {k.lower() for k in keywords}
    if isinstance(value, bool):
        return False
    if isinstance(value, int | float):
        return value == 0
    if isinstance(value, Collection):
        return len(value) == 0
    return False


def assert_layout(
    value: object,
    default_layout: str | None = None,
    *,
    keywords: Iterable[str] = DEFAULT_FALSEY_KEYWORDS,
) -> str | None:
    """Decide which layout, if any, a reference points at.

    Args:
        value: The raw layout reference.
        default_layout: Name used when the reference asks for the default.
        keywords: Falsey string keywords.

    Returns:
        The layout name to use, or None when no layout should be applied.

    Example:
        >>> assert_layout("no", "base") is None
        True
        >>> assert_layout(True, "base")
        'base'
        >>> assert_layout("post", "base")
        'post'
    """
    if value is None or value is True:
        return default_layout or None
    if is_falsey(value, keywords):
        return None
    return str(value)
