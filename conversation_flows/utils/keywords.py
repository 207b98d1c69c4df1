# /conversation_flows/utils/keywords.py

from typing import FrozenSet, Iterable, Set, Tuple

from conversation_flows.config.rules import WORD_RE, PLURAL_MAPPINGS

KeywordRule = Tuple[Set[str], Iterable[str]]


def normalize_text(text: str) -> str:
    """Lowercases and collapses whitespace so phrase checks are stable."""
    return " ".join((text or "").lower().split())


def tokenize(text: str) -> FrozenSet[str]:
    """Returns the set of normalised word tokens in the text, with plurals folded."""
    tokens = WORD_RE.findall(normalize_text(text))
    return frozenset(PLURAL_MAPPINGS.get(token, token) for token in tokens)


def matches_rule(text: str, rule: KeywordRule) -> bool:
    """
    True if any single-word keyword of the rule is one of the input tokens,
    or any multi-word phrase of the rule occurs in the normalised input.
    """
    keywords, phrases = rule
    if keywords and not tokenize(text).isdisjoint(keywords):
        return True
    normalized = normalize_text(text)
    return any(phrase in normalized for phrase in phrases)
