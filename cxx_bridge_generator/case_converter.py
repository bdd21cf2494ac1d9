"""
Identifier case conversion between snake_case and camelCase
"""

import re
from enum import Enum


class Case(Enum):
    """Target conventions supported by convert()"""
    CAMEL = "camel"
    SNAKE = "snake"


# Separators between segments
_SEPARATORS = re.compile(r"[_\- ]+")

# Words inside a segment: acronyms (HTML in HTMLParser), capitalised or
# lower-case words, each keeping any trailing digits
_WORDS = re.compile(r"[A-Z]+(?![a-z])[0-9]*|[A-Z]?[a-z0-9]+|[0-9]+")


def split_words(identifier: str) -> list[str]:
    """Split an identifier into its words"""
    words = []
    for segment in _SEPARATORS.split(identifier):
        if not segment:
            continue
        found = _WORDS.findall(segment)
        # Fall back to the whole segment when nothing is recognised
        if "".join(found) != segment:
            found = [segment]
        words.extend(found)
    return words


def convert(identifier: str, target: Case) -> str:
    """Convert an identifier to the target case convention"""
    words = split_words(identifier)
    if target is Case.SNAKE:
        return "_".join(word.lower() for word in words)

    if not words:
        return ""
    head, *tail = words
    return head.lower() + "".join(word[:1].upper() + word[1:].lower() for word in tail)


def to_camel_case(identifier: str) -> str:
    return convert(identifier, Case.CAMEL)


def to_snake_case(identifier: str) -> str:
    return convert(identifier, Case.SNAKE)
