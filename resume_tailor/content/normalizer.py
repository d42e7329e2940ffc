from __future__ import annotations

import re

# Bounded, non-greedy block removal; an unterminated <script> simply loses its
# opening tag in the generic tag pass below.
_BLOCK_RE = re.compile(
    r"<(script|style|noscript)\b[^>]*>.*?</\1\s*>",
    re.IGNORECASE | re.DOTALL,
)
HTML_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text or "").strip()


def strip_blocks(html: str) -> str:
    """Drop script/style/noscript elements together with their contents."""
    return _BLOCK_RE.sub(" ", html or "")


def normalize_text(html: str | None) -> str:
    if not html:
        return ""
    text = strip_blocks(html)
    text = HTML_TAG_RE.sub(" ", text)
    return collapse_whitespace(text)
