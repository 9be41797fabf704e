import re
from typing import Callable, Optional, Union

from .models import TextRun, Token


# Chicago-style lowercase words: articles, coordinating conjunctions, common prepositions
TITLE_CASE_LOWERCASE_WORDS = frozenset({
    "a", "an", "the",
    "and", "but", "or", "nor", "for", "so", "yet",
    "as", "at", "by", "from", "in", "into", "of", "off", "on",
    "onto", "out", "over", "to", "up", "with", "via",
})

# word characters are ASCII-only, matching how the macros tokenized text
_WORD_CHARS = "A-Za-z0-9_"

_TITLE_SPLIT_RE = re.compile(r"(\s+|[-—:])")
_WHITESPACE_RE = re.compile(r"\s+")
_WORD_PARTS_RE = re.compile(rf"^([^{_WORD_CHARS}]*)([{_WORD_CHARS}]+)([^{_WORD_CHARS}]*)$")
_WORD_START_RE = re.compile(rf"\b[{_WORD_CHARS}]", re.ASCII)

_DASHES = ("-", "—")


def _map_chars(text: str, mapper: Callable[[str], str]) -> str:
    """
    Apply a per-character case mapping, keeping any character whose mapping
    would change length (e.g. 'ß' -> 'SS') as it was.
    """
    out = []
    for ch in text:
        mapped = mapper(ch)
        out.append(mapped if len(mapped) == 1 else ch)
    return "".join(out)


def to_lower(text: str) -> str:
    return _map_chars(text, str.lower)


def to_upper(text: str) -> str:
    return _map_chars(text, str.upper)


def _capitalize(word: str) -> str:
    if not word:
        return word
    return to_upper(word[0]) + to_lower(word[1:])


def to_initial_caps(text: str) -> str:
    """Uppercase the first character of every word; interior letters are left alone."""
    return _WORD_START_RE.sub(lambda m: to_upper(m.group(0)), text)


def to_sentence_case(text: str) -> str:
    """Lowercase everything, then uppercase only the very first character."""
    lowered = to_lower(text)
    if not lowered:
        return lowered
    return to_upper(lowered[0]) + lowered[1:]


def _classify_fragment(fragment: str, index: int) -> Token:
    if _WHITESPACE_RE.fullmatch(fragment):
        return Token(kind="whitespace", text=fragment, index=index)
    if fragment in _DASHES:
        return Token(kind="dash", text=fragment, index=index)
    if fragment == ":":
        return Token(kind="colon", text=fragment, index=index)

    match = _WORD_PARTS_RE.match(fragment)
    if not match:
        # empty, no word characters, or word characters broken up by punctuation ("don't")
        return Token(kind="other", text=fragment, index=index)

    leading, core, trailing = match.groups()
    return Token(kind="word", text=fragment, index=index, leading=leading, core=core, trailing=trailing)


def tokenize_title(text: str) -> list[Token]:
    """
    Split text into a tagged token sequence for title casing.

    Whitespace runs, '-', '—' and ':' become standalone separator tokens;
    everything between them is a word (or 'other' when it cannot be split
    into leading punctuation, one word, trailing punctuation).

    The empty fragments the split leaves at the ends and between adjacent
    separators are kept as 'other' tokens. They are not separators, so a
    word preceded by leading whitespace is not the first word, and a word
    followed by a trailing colon is not the last.
    """
    fragments = _TITLE_SPLIT_RE.split(text)
    return [_classify_fragment(fragment, i) for i, fragment in enumerate(fragments)]


def to_title_case(text: str) -> str:
    """
    Chicago-style title case.

    A word is capitalized if it is the first or last non-separator token,
    follows a colon, or is not in TITLE_CASE_LOWERCASE_WORDS. Everything
    else is lowercased. Only letter case changes; separators and
    punctuation pass through untouched.
    """
    tokens = tokenize_title(text)
    if not tokens:
        return text

    content_positions = [i for i, t in enumerate(tokens) if not t.is_separator]
    first = content_positions[0] if content_positions else None
    last = content_positions[-1] if content_positions else None

    after_colon = False
    out = []

    for i, token in enumerate(tokens):
        if token.kind == "colon":
            after_colon = True
            out.append(token.text)
            continue
        if token.kind != "word":
            out.append(token.text)
            continue

        lower_word = to_lower(token.core)
        should_capitalize = (
            i == first
            or i == last
            or after_colon
            or lower_word not in TITLE_CASE_LOWERCASE_WORDS
        )
        after_colon = False

        cased = _capitalize(lower_word) if should_capitalize else lower_word
        out.append(token.leading + cased + token.trailing)

    return "".join(out)


CASE_STYLES: dict[str, Callable[[str], str]] = {
    "lower": to_lower,
    "upper": to_upper,
    "initial_caps": to_initial_caps,
    "sentence": to_sentence_case,
    "title": to_title_case,
}


def change_case(text: Union[str, TextRun], style: str) -> Union[str, TextRun]:
    """Dispatch to a case transform by name. Accepts a plain string or a TextRun."""
    try:
        transform = CASE_STYLES[style]
    except KeyError:
        raise ValueError(f"Unknown case style {style!r}; expected one of {sorted(CASE_STYLES)}") from None

    if isinstance(text, TextRun):
        return TextRun(content=transform(text.content))
    return transform(text)


def transform_selection(text: str, style: str, start: int = 0, end: Optional[int] = None) -> str:
    """Apply a case style to text[start:end] only, leaving the rest as-is."""
    length = len(text)
    end = length if end is None else min(max(end, 0), length)
    start = min(max(start, 0), end)

    selected = change_case(text[start:end], style)
    return text[:start] + selected + text[end:]


def case_edits(original: str, transformed: str) -> list[tuple[int, str]]:
    """
    Return the minimal per-character edits turning original into transformed.

    Each edit is (index, new_char). Callers that style text per character
    apply only these positions so surrounding formatting survives.
    """
    if len(original) != len(transformed):
        raise ValueError(
            f"Case transforms must preserve length ({len(original)} != {len(transformed)})"
        )
    return [(i, new) for i, (old, new) in enumerate(zip(original, transformed)) if old != new]
