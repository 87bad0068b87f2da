"""YAML front-matter parsing for template content."""

from typing import cast

import yaml

# Type aliases for YAML front-matter data
type YAMLPrimitive = str | int | float | bool | None
type YAMLKey = str | int | float | bool
type YAMLValue = YAMLPrimitive | list[YAMLValue] | dict[YAMLKey, YAMLValue]
type YAMLFrontmatter = dict[str, YAMLValue]

_FENCE = "---"


def parse_frontmatter(content: str) -> tuple[YAMLFrontmatter | None, str]:
    """Split a leading YAML front-matter block off template content.

    The block must start on the first line with ``---`` and end with a line
    holding only ``---``. The newline after the closing fence is dropped;
    the rest of the body is returned untouched.

    Args:
        content: The full template text.

    Returns:
        A tuple of (front-matter dict or None, body). When no valid block is
        found the content is returned unchanged.
    """
    if not content.startswith(_FENCE):
        return None, content

    first_newline = content.find("\n")
    if first_newline == -1 or content[:first_newline].strip() != _FENCE:
        return None, content

    end_marker = content.find(f"\n{_FENCE}", first_newline)
    if end_marker == -1:
        return None, content

    frontmatter_str = content[first_newline + 1 : end_marker]
    body_start = end_marker + 1 + len(_FENCE)
    rest_of_line_end = content.find("\n", body_start)
    if rest_of_line_end == -1:
        if content[body_start:].strip():
            return None, content
        body = ""
    else:
        if content[body_start:rest_of_line_end].strip():
            return None, content
        body = content[rest_of_line_end + 1 :]

    try:
        frontmatter_data = yaml.safe_load(frontmatter_str)  # pyright: ignore[reportAny]
    except yaml.YAMLError:
        return None, content

    if frontmatter_data is None:
        return {}, body
    if not isinstance(frontmatter_data, dict):
        return None, content

    return cast("YAMLFrontmatter", frontmatter_data), body
