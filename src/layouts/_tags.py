"""Body placeholder tag construction and matching."""

import re
from functools import lru_cache
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_DELIMS: tuple[str, str] = ("{%", "%}")
DEFAULT_TAG_NAME: str = "body"


class TagConfig(BaseModel):
    """Shape of the body placeholder.

    Attributes:
        delims: Opening and closing delimiters of the placeholder.
        tag: Variable name between the delimiters.
        sep: Separator placed between delimiters and tag in the literal form.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    delims: tuple[str, str] = DEFAULT_DELIMS
    tag: str = Field(default=DEFAULT_TAG_NAME, min_length=1)
    sep: str = " "


def make_tag(config: TagConfig | None = None) -> str:
    """Build the literal body placeholder, e.g. ``{% body %}``.

    Args:
        config: Tag shape. Defaults to ``TagConfig()``.

    Returns:
        The placeholder string.
    """
    if config is None:
        config = TagConfig()
    opening, closing = config.delims
    return config.sep.join((opening, config.tag, closing))


@lru_cache(maxsize=64)
def _compile(opening: str, tag: str, closing: str, flags: int) -> re.Pattern[str]:
    pattern = r"\s*".join(re.escape(part) for part in (opening, tag, closing))
    return re.compile(pattern, flags)


def make_regex(config: TagConfig | None = None, flags: int = 0) -> re.Pattern[str]:
    """Compile a pattern matching the body placeholder.

    Every part is escaped, and the separator is relaxed to ``\\s*`` so that
    ``{%body%}`` and ``{%  body  %}`` are matched as well as ``{% body %}``.
    Patterns are cached per delimiter pair, tag name and flags.

    Args:
        config: Tag shape. Defaults to ``TagConfig()``.
        flags: Extra ``re`` flags.

    Returns:
        The compiled pattern.
    """
    if config is None:
        config = TagConfig()
    opening, closing = config.delims
    return _compile(opening, config.tag, closing, flags)


def replace_tag(
    replacement: str,
    content: str,
    config: TagConfig | re.Pattern[str] | None = None,
) -> str:
    """Replace every body placeholder in ``content`` with ``replacement``.

    This is a plain textual substitution; nothing is rendered, and
    backslashes or group references in ``replacement`` are kept literally.

    Args:
        replacement: The string to inject.
        content: A string containing body placeholders.
        config: Tag shape, or an already compiled placeholder pattern.

    Returns:
        The content with all placeholders replaced.

    Example:
        >>> replace_tag("ABC", "Before {% body %} After")
        'Before ABC After'
    """
    regex = config if isinstance(config, re.Pattern) else make_regex(config)
    return regex.sub(lambda _: replacement, content)
