# mini_spine/kernel/tags.py
"""
Word-set tags.

A tag string such as "vertical muscle a" is treated as the set of its
words. A pattern matches a tag set when every word of the pattern is in
the set, so "muscle" matches every connector and "saddle muscle seg-0"
matches only the saddle connectors of the first adjacent pair.
"""

from typing import FrozenSet, Iterable, Union

from .errors import InvalidParameter

TagLike = Union[str, Iterable[str]]


def parse_tags(tags: TagLike) -> FrozenSet[str]:
    """Split a tag string (or an iterable of tag strings) into a word set."""
    if isinstance(tags, str):
        return frozenset(tags.split())
    words = set()
    for tag in tags:
        words.update(tag.split())
    return frozenset(words)


def tags_match(tags: TagLike, pattern: TagLike) -> bool:
    """True if every word of ``pattern`` appears in ``tags``."""
    wanted = parse_tags(pattern)
    if not wanted:
        return False
    return wanted <= parse_tags(tags)


def check_tag(tag: str) -> str:
    """Validate and normalise a single tag string (single spaces)."""
    if not isinstance(tag, str) or not tag.split():
        raise InvalidParameter(f"Tag must be a non-empty string, got {tag!r}")
    return " ".join(tag.split())
