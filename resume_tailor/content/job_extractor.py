from __future__ import annotations

import html
import json
import logging
import re
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Literal

from bs4 import BeautifulSoup

from resume_tailor.content.normalizer import normalize_text
from resume_tailor.core.errors import ExtractionFailed

logger = logging.getLogger(__name__)

Strategy = Literal[
    "structured_data",
    "meta_tag",
    "content_selector",
    "main_content_fallback",
    "brute_force",
]

MIN_RESULT_CHARS = 50
ACCEPT_CHARS = 100
MAX_JOB_POSTING_CHARS = 10_000
MAX_JSON_DEPTH = 32

EXTRACTION_FAILED_MESSAGE = (
    "Could not extract meaningful content from this URL. This website may require JavaScript "
    "to load the job description, or the content structure is not supported. Please copy and "
    "paste the job description text directly instead."
)

_LD_JSON_TYPE_RE = re.compile(r"application/ld\+json", re.IGNORECASE)
_JOB_FIELDS = ("description", "qualifications", "responsibilities")
_NOISE_TAGS = ["script", "style", "noscript"]

# (tag, attribute, pattern) in priority order.
CONTENT_SELECTORS: tuple[tuple[str, str, re.Pattern[str]], ...] = (
    ("div", "class", re.compile(r"job.*description", re.IGNORECASE)),
    ("div", "class", re.compile(r"description", re.IGNORECASE)),
    ("div", "id", re.compile(r"job.*description", re.IGNORECASE)),
    ("section", "class", re.compile(r"job.*description", re.IGNORECASE)),
    ("article", "class", re.compile(r"job", re.IGNORECASE)),
)
_CONTENT_CLASS_RE = re.compile(r"content", re.IGNORECASE)


@dataclass(frozen=True)
class ExtractionResult:
    text: str
    strategy_used: Strategy
    truncated: bool = False


def _safe_json_loads(value: str) -> Any:
    try:
        return json.loads(value)
    except (TypeError, ValueError, RecursionError):
        return None


def _iter_json_nodes(payload: Any) -> list[dict[str, Any]]:
    """Dict nodes of a JSON-LD payload: the payload, list items and ``@graph`` members.

    Walked breadth-first without recursion; anything nested deeper than
    ``MAX_JSON_DEPTH`` is ignored.
    """
    nodes: list[dict[str, Any]] = []
    pending: deque[tuple[Any, int]] = deque([(payload, 0)])
    while pending:
        item, depth = pending.popleft()
        if depth > MAX_JSON_DEPTH:
            continue
        if isinstance(item, dict):
            nodes.append(item)
            graph = item.get("@graph")
            if isinstance(graph, list):
                pending.extend((child, depth + 1) for child in graph)
        elif isinstance(item, list):
            pending.extend((child, depth + 1) for child in item)
    return nodes


def _is_job_posting_node(node: dict[str, Any]) -> bool:
    type_value = node.get("@type")
    types = type_value if isinstance(type_value, list) else [type_value]
    if any(str(item).replace(" ", "").lower() == "jobposting" for item in types if item):
        return True
    return any(node.get(key) for key in ("title", "jobTitle", "description"))


def _field_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError):
        return ""


def _attr_text(node: Any, attr: str) -> str:
    value = node.get(attr)
    if isinstance(value, (list, tuple)):
        return " ".join(str(item) for item in value)
    return str(value or "")


def _node_text(node: Any) -> str:
    return normalize_text(node.get_text(" "))


def _join(*parts: str) -> str:
    return " ".join(part for part in parts if part).strip()


def _structured_data_text(soup: BeautifulSoup) -> str:
    chunks: list[str] = []
    for script in soup.find_all("script", attrs={"type": _LD_JSON_TYPE_RE}):
        payload = _safe_json_loads((script.string or script.get_text() or "").strip())
        if payload is None:
            continue
        for node in _iter_json_nodes(payload):
            if not _is_job_posting_node(node):
                continue
            for field in _JOB_FIELDS:
                value = node.get(field)
                if value:
                    chunks.append(_field_text(value))
    # Job boards usually ship the description as escaped HTML.
    return normalize_text(html.unescape(" ".join(chunks)))


def _meta_description_text(soup: BeautifulSoup) -> str:
    for meta in soup.find_all("meta"):
        if _attr_text(meta, "name").strip().lower() == "description":
            return normalize_text(_attr_text(meta, "content"))
    return ""


def _content_selector_text(soup: BeautifulSoup) -> str:
    chunks: list[str] = []
    for tag, attr, pattern in CONTENT_SELECTORS:
        for node in soup.find_all(tag):
            if not pattern.search(_attr_text(node, attr)):
                continue
            text = _node_text(node)
            if len(text) >= ACCEPT_CHARS and text not in chunks:
                chunks.append(text)
    return " ".join(chunks)


def _main_content_text(soup: BeautifulSoup) -> str:
    nodes = soup.find_all("main") or soup.find_all("article")
    if not nodes:
        nodes = [node for node in soup.find_all("div") if _CONTENT_CLASS_RE.search(_attr_text(node, "class"))]
    chunks: list[str] = []
    for node in nodes:
        text = _node_text(node)
        if len(text) >= ACCEPT_CHARS and text not in chunks:
            chunks.append(text)
    return " ".join(chunks)


def _parse(page_html: str) -> BeautifulSoup | None:
    try:
        return BeautifulSoup(page_html, "html.parser")
    except Exception as exc:  # noqa: BLE001 - hostile markup must degrade, not crash
        logger.warning("job_extract_parse_failed chars=%s: %s", len(page_html), exc)
        return None


def _truncate(text: str, strategy: Strategy, max_chars: int) -> ExtractionResult:
    if len(text) > max_chars:
        return ExtractionResult(text=text[:max_chars], strategy_used=strategy, truncated=True)
    return ExtractionResult(text=text, strategy_used=strategy)


def extract_job_text(page_html: str | None, *, max_chars: int = MAX_JOB_POSTING_CHARS) -> ExtractionResult:
    """Pull the job description out of a fetched page.

    Strategies run cheapest and most precise first: JSON-LD ``JobPosting``
    data, the meta description, known description containers, then the main
    content area and finally the whole document. Text from the first three
    steps accumulates until it reaches ``ACCEPT_CHARS``.

    A result longer than ``max_chars`` is cut and flagged ``truncated``; the
    caller decides whether that is acceptable.

    Raises:
        ExtractionFailed: when fewer than ``MIN_RESULT_CHARS`` characters of
            text could be recovered.
    """
    page_html = page_html or ""
    soup = _parse(page_html)
    if soup is None:
        text = normalize_text(page_html)
        if len(text) < MIN_RESULT_CHARS:
            raise ExtractionFailed(EXTRACTION_FAILED_MESSAGE)
        return _truncate(text, "brute_force", max_chars)

    text = ""
    strategy: Strategy = "brute_force"
    steps: tuple[tuple[Strategy, Callable[[BeautifulSoup], str]], ...] = (
        ("structured_data", _structured_data_text),
        ("meta_tag", _meta_description_text),
        ("content_selector", _content_selector_text),
    )
    for name, step in steps:
        if name == "content_selector":
            # Container text must not pick up inline scripts or styles.
            for noise in soup.find_all(_NOISE_TAGS):
                noise.decompose()
        chunk = step(soup)
        if chunk:
            text = _join(text, chunk)
            strategy = name
        if len(text) >= ACCEPT_CHARS:
            break

    if len(text) < ACCEPT_CHARS:
        chunk = _main_content_text(soup)
        if chunk:
            text = _join(text, chunk)
            strategy = "main_content_fallback"

    if len(text) < ACCEPT_CHARS:
        text = _node_text(soup)
        strategy = "brute_force"

    text = normalize_text(text)
    if len(text) < MIN_RESULT_CHARS:
        logger.info("job_extract_failed chars=%s", len(text))
        raise ExtractionFailed(EXTRACTION_FAILED_MESSAGE)

    logger.info("job_extract_ok strategy=%s chars=%s", strategy, len(text))
    return _truncate(text, strategy, max_chars)
