"""Content normalizer: strip language-model artifacts from raw text.

normalize() is a pure text-to-text transform with no domain knowledge.  It is
applied until the text stops changing; every step only deletes characters,
so the loop terminates and the result is idempotent.
"""
from __future__ import annotations

import re
from typing import Optional

from preprod_engine.extraction.vocabulary import CLOSING_LEADS, PREAMBLE_LEADS, PREAMBLE_OPENERS


def _alternation(phrases) -> str:
    ordered = sorted(phrases, key=len, reverse=True)
    return "|".join(re.escape(p).replace("'", "['’]") for p in ordered)


# "Certainly! Here is the storyboard for scene 3:" up to and including the colon.
_PREAMBLE_RE = re.compile(
    rf"""\A\s*
    (?:(?:{_alternation(PREAMBLE_OPENERS)})\b[!.,]*\s*)?
    (?:{_alternation(PREAMBLE_LEADS)})\b
    [^\n:]{{0,200}}:[ \t]*""",
    re.IGNORECASE | re.VERBOSE,
)
# "Let me know if you'd like any changes!" as the final paragraph.
_CLOSING_RE = re.compile(
    rf"(?:\A|\n)[ \t]*(?:{_alternation(CLOSING_LEADS)})\b[^\n]*\s*\Z",
    re.IGNORECASE,
)
_FENCE_RE = re.compile(r"```[A-Za-z0-9_+-]*")
_BOLD_RE = re.compile(r"\*\*(.+?)\*\*", re.DOTALL)
_UNDERSCORE_BOLD_RE = re.compile(r"__(.+?)__", re.DOTALL)
_ITALIC_RE = re.compile(r"(?<![*\w])\*(?![\s*])([^*\n]+?)(?<!\s)\*(?![*\w])")
_UNDERSCORE_ITALIC_RE = re.compile(r"(?<![_\w])_(?![\s_])([^_\n]+?)(?<!\s)_(?![_\w])")
_UNDERLINE_TAG_RE = re.compile(r"</?u>", re.IGNORECASE)
_TRAILING_SPACE_RE = re.compile(r"[ \t]+\n")
_BLANK_RUN_RE = re.compile(r"\n{3,}")


def strip_emphasis(text: str) -> str:
    """Remove bold/italic/underline markup, keeping the enclosed text."""
    text = _BOLD_RE.sub(r"\1", text)
    text = _UNDERSCORE_BOLD_RE.sub(r"\1", text)
    text = _ITALIC_RE.sub(r"\1", text)
    text = _UNDERSCORE_ITALIC_RE.sub(r"\1", text)
    return _UNDERLINE_TAG_RE.sub("", text)


def _normalize_once(text: str, emphasis: bool) -> str:
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _PREAMBLE_RE.sub("", text)
    text = _CLOSING_RE.sub("", text)
    text = _FENCE_RE.sub("", text)
    if emphasis:
        text = strip_emphasis(text)
    text = _TRAILING_SPACE_RE.sub("\n", text)
    text = _BLANK_RUN_RE.sub("\n\n", text)
    return text.strip()


def normalize(text: Optional[str], *, keep_emphasis: bool = False) -> str:
    """Return *text* cleaned of model chatter, code fences and markdown emphasis.

    keep_emphasis leaves bold/italic markers in place for callers that use
    them as block delimiters (storyboard bold shot markers).
    """
    if not text:
        return ""
    current = text
    while True:
        cleaned = _normalize_once(current, emphasis=not keep_emphasis)
        if cleaned == current:
            return cleaned
        current = cleaned
