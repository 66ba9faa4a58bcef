"""Open-tag attribute parsing."""
from __future__ import annotations

import re
from typing import Tuple

from .nodes import Attribute

ATTRIBUTE_PATTERN = re.compile(
    r"""([^\s"'<>/=]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+)))?""",
    re.DOTALL,
)


def parse_attributes(text: str) -> Tuple[Attribute, ...]:
    """Parse the attribute section of an open tag.

    Example:
        >>> [a.name for a in parse_attributes(' class="a" x-for="items" hidden')]
        ['class', 'x-for', 'hidden']
    """
    attributes = []
    for match in ATTRIBUTE_PATTERN.finditer(text):
        name = match.group(1)
        if match.group(2) is not None:
            value = match.group(2)
        elif match.group(3) is not None:
            value = match.group(3)
        else:
            value = match.group(4)
        attributes.append(Attribute(name=name, value=value, raw=match.group(0)))
    return tuple(attributes)


__all__ = ["ATTRIBUTE_PATTERN", "parse_attributes"]
