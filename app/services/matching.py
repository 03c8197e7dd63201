"""
Banned-word matching.

Fuzzy, obfuscation-aware text matching used to hide videos whose title,
description or channel name contains a banned term. Tolerates:

- typos (adaptive Levenshtein distance),
- censoring characters (``f**k``, ``a$$``, ``s#!t``),
- spacing tricks (``b a d w o r d``) and missing spaces in phrases,
- initial abbreviations of two-word phrases (``j. doe`` for ``john doe``).

All functions are pure and safe to call concurrently.
"""
import re
from typing import Iterable, List

CENSOR_CLASS = "[*$#@]"

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")
_SPACED_LETTERS = re.compile(r"\b(\w)\s+(?=\w\b)")
_CENSOR_RUN = re.compile(r"^[*$#@]+$")


def normalize(text: str) -> str:
    """Lower-case and drop everything that is neither a word char nor whitespace."""
    return _NON_WORD.sub("", text.lower())


def join_spaced_letters(text: str) -> str:
    """Collapse runs of single-character tokens: ``watch b a d w o r d`` -> ``watch badword``."""
    return _SPACED_LETTERS.sub(r"\1", text)


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance with unit cost insertions, deletions and substitutions."""
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(a) + 1))
    for i, b_char in enumerate(b, start=1):
        current = [i]
        for j, a_char in enumerate(a, start=1):
            cost = 0 if a_char == b_char else 1
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + cost,
            ))
        previous = current

    return previous[-1]


def adjusted_threshold(word: str, banned: str, threshold: int) -> int:
    """
    Tighten the edit-distance budget for short words.

    Up to 3 chars only exact matches count, up to 5 at most one edit,
    beyond that at most one edit per four characters.
    """
    length = max(len(word), len(banned))
    if length <= 3:
        return 0
    if length <= 5:
        return min(threshold, 1)
    return min(threshold, length // 4)


def is_censored_version(word: str, banned: str) -> bool:
    """Return True if `word` looks like `banned` with letters masked out."""
    if not word or not banned:
        return False

    if abs(len(word) - len(banned)) > 3:
        return False

    word = word.lower()
    banned = banned.lower()
    first = banned[0]

    if word[0] != first:
        return False

    # f***
    if len(word) > 1 and all(char == "*" for char in word[1:]):
        return True

    # fuck*** / fuck*ing
    if word.startswith(banned[:4]) and "*" in word:
        return True

    # f**k, a$$s
    if (
        len(word) >= 3
        and word[-1] == banned[-1]
        and _CENSOR_RUN.match(word[1:-1])
    ):
        return True

    # f$#@ - every letter after the first masked
    masked = re.escape(first) + CENSOR_CLASS * (len(banned) - 1)
    return re.fullmatch(masked, word) is not None


def _matches_term(raw_lower: str, normalized_text: str, joined_text: str, banned: str) -> bool:
    """Substring, spacing, abbreviation and censoring-run checks for one term."""
    banned_lower = banned.lower()
    normalized_banned = normalize(banned_lower)

    if normalized_banned in normalized_text:
        return True

    compressed_banned = _WHITESPACE.sub("", normalized_banned)
    if len(compressed_banned) > 2 and (
        compressed_banned in normalized_text or compressed_banned in joined_text
    ):
        return True

    if " " in banned_lower:
        parts = banned_lower.split(" ")
        if len(parts) == 2 and parts[0]:
            pattern = re.escape(parts[0][0]) + r"\.\s+" + re.escape(parts[1])
            if re.search(pattern, raw_lower):
                return True

    last = re.escape(banned_lower[-1]) if len(banned_lower) > 2 else ""
    censored = re.escape(banned_lower[0]) + CENSOR_CLASS + "+" + last
    return re.search(censored, raw_lower) is not None


def _matches_word(word: str, banned: str, threshold: int) -> bool:
    """Typo-tolerant comparison of a single text token against a normalized term."""
    if word == banned:
        return True

    if is_censored_version(word, banned):
        return True

    budget = adjusted_threshold(word, banned, threshold)
    if budget == 0:
        return False

    return levenshtein_distance(word, banned) <= budget


def contains_banned_word(text: str, banned_words: Iterable[str], threshold: int) -> bool:
    """
    Check whether `text` contains any of `banned_words`.

    Args:
        text: Title, description or channel name
        banned_words: Case-insensitive terms; may contain spaces
        threshold: Maximum Levenshtein distance before adaptive tightening

    Returns:
        True on the first matching term
    """
    if not text:
        return False

    terms: List[str] = [word for word in banned_words if normalize(word).strip()]
    if not terms:
        return False

    raw_lower = text.lower()
    normalized_text = normalize(text)
    joined_text = join_spaced_letters(normalized_text)

    for banned in terms:
        if _matches_term(raw_lower, normalized_text, joined_text, banned):
            return True

    normalized_terms = [normalize(banned) for banned in terms]
    for word in normalized_text.split():
        for banned in normalized_terms:
            if _matches_word(word, banned, threshold):
                return True

    return False


def is_short_form_content(length_seconds: int, threshold: int) -> bool:
    """Videos strictly shorter than `threshold` seconds are short form."""
    return length_seconds < threshold
