from typing import Mapping, Sequence

import regex

from search.dictionaries import COMMON_TYPOS

STOP_WORDS = frozenset({
    "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
})

PARTIAL_MIN_LENGTH = 4

_DISALLOWED_CHARS = regex.compile(r"[^\p{L}\p{N}_\s-]")


def clean_punctuation(text):
    return _DISALLOWED_CHARS.sub(" ", text)

def basic_token_filter(token):
    if len(token) < 2:
        return False
    if token in STOP_WORDS:
        return False
    return True

def split_words(text):
    if not text:
        return []

    text = text.lower().strip()

    text = clean_punctuation(text)

    tokens = text.split()

    return [t for t in tokens if basic_token_filter(t)]

def expand_token(token: str, variants: Mapping[str, Sequence[str]] = COMMON_TYPOS) -> list[str]:
    """
    Return the token together with its partial forms and dictionary variants.

    Partial forms drop the last one and two characters and are only produced
    for tokens of at least PARTIAL_MIN_LENGTH characters, so "shirt" also
    yields "shir" and "shi".
    """
    expanded = [token]

    if len(token) >= PARTIAL_MIN_LENGTH:
        expanded.append(token[:-1])
        expanded.append(token[:-2])

    expanded.extend(v.lower() for v in variants.get(token, ()))

    return [t for t in expanded if basic_token_filter(t)]

def normalize_query(query, variants: Mapping[str, Sequence[str]] = COMMON_TYPOS) -> frozenset[str]:
    tokens: set[str] = set()

    for word in split_words(query):
        tokens.update(expand_token(word, variants))

    return frozenset(tokens)
