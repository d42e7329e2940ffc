from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, Union

from resume_tailor.content.normalizer import normalize_text

BlockReason = Literal["auth_required", "not_found", "http_error"]
GateReason = Literal["login_wall", "paywall_likely"]

LOGIN_SIGNATURES = (
    re.compile(r"sign\s*in|log\s*in|login|authentication|access\s*denied|unauthorized|forbidden", re.IGNORECASE),
    re.compile(r"please\s*log\s*in|sign\s*in\s*to\s*continue|access\s*restricted", re.IGNORECASE),
)
LOGIN_FORM_RE = re.compile(
    r"<form[^>]*>.*?(?:password|username|email|login).*?</form>",
    re.IGNORECASE | re.DOTALL,
)
PAYWALL_SIGNATURES = (
    re.compile(r"subscribe\s*(?:now\s*)?to\s*(?:continue|keep)\s*reading", re.IGNORECASE),
    re.compile(r"subscribers?[\s-]*only|for\s*(?:paying\s*)?members\s*only", re.IGNORECASE),
    re.compile(r"this\s*content\s*is\s*(?:only\s*)?(?:available\s*)?for\s*members", re.IGNORECASE),
    re.compile(r"premium\s*content|\bpaywall\b", re.IGNORECASE),
)

THIN_PAGE_CHARS = 200
THIN_FORM_PAGE_CHARS = 500
THIN_PAYWALL_PAGE_CHARS = 500


@dataclass(frozen=True)
class AccessOk:
    html: str


@dataclass(frozen=True)
class AccessBlocked:
    reason: BlockReason
    status_code: int


@dataclass(frozen=True)
class AccessGated:
    reason: GateReason


AccessOutcome = Union[AccessOk, AccessBlocked, AccessGated]


def has_login_signature(body: str) -> bool:
    return any(pattern.search(body) for pattern in LOGIN_SIGNATURES)


def has_login_form(body: str) -> bool:
    return bool(LOGIN_FORM_RE.search(body))


def has_paywall_signature(body: str) -> bool:
    return any(pattern.search(body) for pattern in PAYWALL_SIGNATURES)


def detect_access_issue(status_code: int, body: str | None) -> AccessOutcome:
    if status_code in {401, 403}:
        return AccessBlocked(reason="auth_required", status_code=status_code)
    if status_code == 404:
        return AccessBlocked(reason="not_found", status_code=status_code)
    if not 200 <= status_code < 300:
        return AccessBlocked(reason="http_error", status_code=status_code)

    html = body or ""
    login_signature = has_login_signature(html)
    login_form = has_login_form(html)
    paywall_signature = has_paywall_signature(html)
    if not (login_signature or login_form or paywall_signature):
        return AccessOk(html=html)

    # A "sign in" link in the header or footer is common on public postings;
    # only thin pages are treated as gated.
    visible_chars = len(normalize_text(html))
    if login_signature or login_form:
        if visible_chars < THIN_PAGE_CHARS or (login_form and visible_chars < THIN_FORM_PAGE_CHARS):
            return AccessGated(reason="login_wall")
    if paywall_signature and visible_chars < THIN_PAYWALL_PAGE_CHARS:
        return AccessGated(reason="paywall_likely")
    return AccessOk(html=html)
