"""
Hashtag extraction policy.

The default policy recognises ``#`` followed by word characters, where
the ``#`` is not itself glued to a preceding word character (so
``issue#12`` is not a tag). Services never call this directly; it is
injected as a ``Callable[[str], Iterable[str]]``.
"""

import re
from typing import Set

HASHTAG_PATTERN = re.compile(r"(?<!\w)#(\w+)")


def extract_hashtags(content: str) -> Set[str]:
    """
    Derive the set of tags from free text.

    Args:
        content: Publication text

    Returns:
        Distinct tags without the leading ``#``
    """
    if not content:
        return set()
    return set(HASHTAG_PATTERN.findall(content))
