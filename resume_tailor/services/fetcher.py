from __future__ import annotations

import ipaddress
import logging
import re
import socket
import time
from dataclasses import dataclass
from urllib.parse import urlparse, urlunparse

import httpx

from resume_tailor.core.config import settings
from resume_tailor.core.errors import ContentTooLong, FetchFailed, FetchTimeout, InputValidationError

logger = logging.getLogger(__name__)

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/122.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


TIMEOUT_MESSAGE = (
    "The request to this URL timed out. Please try again later or paste the job description text directly."
)


@dataclass(frozen=True)
class FetchedPage:
    url: str
    status_code: int
    text: str


def normalize_public_url(raw_url: str) -> tuple[str, str]:
    value = (raw_url or "").strip()
    if not value:
        raise InputValidationError("Valid URL is required.")
    if not re.match(r"^https?://", value, flags=re.IGNORECASE):
        value = f"https://{value}"
    parsed = urlparse(value)
    if parsed.scheme.lower() not in {"http", "https"}:
        raise InputValidationError("Only http/https URLs are supported.")
    hostname = (parsed.hostname or "").lower().strip()
    if not parsed.netloc or not hostname:
        raise InputValidationError("Valid URL is required.")
    normalized = urlunparse(
        (
            parsed.scheme.lower(),
            parsed.netloc.lower(),
            parsed.path or "/",
            "",
            parsed.query,
            "",
        )
    )
    return normalized, hostname


def host_is_private_or_local(hostname: str) -> bool:
    host = (hostname or "").strip().lower()
    if host in {"localhost", "127.0.0.1", "::1"} or host.endswith(".local"):
        return True
    try:
        ip = ipaddress.ip_address(host)
        return bool(ip.is_private or ip.is_loopback or ip.is_link_local or ip.is_reserved)
    except ValueError:
        pass
    try:
        for _family, _socktype, _proto, _canon, sockaddr in socket.getaddrinfo(host, None):
            address = sockaddr[0] if sockaddr else ""
            if not address:
                continue
            try:
                resolved = ipaddress.ip_address(address)
            except ValueError:
                continue
            if resolved.is_private or resolved.is_loopback or resolved.is_link_local or resolved.is_reserved:
                return True
    except OSError:
        # Unresolvable hosts fail later in the fetch with a clearer message.
        return False
    return False


def _read_body(response: httpx.Response, *, deadline: float, max_bytes: int) -> bytes:
    chunks: list[bytes] = []
    total = 0
    for chunk in response.iter_bytes():
        if time.monotonic() > deadline:
            raise FetchTimeout(TIMEOUT_MESSAGE)
        total += len(chunk)
        if total > max_bytes:
            raise ContentTooLong(
                "The page at this URL is too large to process. Please paste the job description text directly instead."
            )
        chunks.append(chunk)
    return b"".join(chunks)


def fetch_page(raw_url: str, *, timeout_s: float | None = None) -> FetchedPage:
    """GET a public page, bounded by ``timeout_s`` for the whole exchange.

    httpx timeouts apply per connect/read step, so a server trickling bytes
    would never trip them; the body is streamed against an overall deadline.
    """
    normalized_url, hostname = normalize_public_url(raw_url)
    if host_is_private_or_local(hostname):
        raise InputValidationError("Private or local URLs are not allowed.")

    timeout = timeout_s if timeout_s is not None else settings.fetch_timeout_s
    deadline = time.monotonic() + timeout
    try:
        with httpx.Client(timeout=timeout, follow_redirects=True, headers=BROWSER_HEADERS) as client:
            with client.stream("GET", normalized_url) as response:
                body = _read_body(response, deadline=deadline, max_bytes=settings.max_fetch_bytes)
                status_code = int(response.status_code)
                final_url = str(response.url)
                encoding = response.encoding or "utf-8"
    except FetchTimeout:
        logger.info("fetch_deadline_exceeded url=%s timeout=%s", normalized_url, timeout)
        raise
    except httpx.TimeoutException as exc:
        logger.info("fetch_timeout url=%s timeout=%s", normalized_url, timeout)
        raise FetchTimeout(TIMEOUT_MESSAGE) from exc
    except httpx.HTTPError as exc:
        logger.info("fetch_failed url=%s: %s", normalized_url, exc)
        raise FetchFailed(f"Failed to fetch URL: {exc}") from exc

    try:
        text = body.decode(encoding, errors="replace")
    except LookupError:
        text = body.decode("utf-8", errors="replace")
    logger.info("fetch_ok url=%s status=%s bytes=%s", normalized_url, status_code, len(body))
    return FetchedPage(url=final_url, status_code=status_code, text=text)
