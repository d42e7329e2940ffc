from __future__ import annotations

import logging
import smtplib
import ssl
from datetime import datetime, timezone
from email.message import EmailMessage

from resume_tailor.core.config import settings

logger = logging.getLogger(__name__)


def _smtp_ready() -> bool:
    return bool(settings.smtp_host and settings.smtp_user and settings.feature_request_recipient)


def _smtp_password() -> str | None:
    if not settings.smtp_password:
        return None
    # Gmail app passwords are often copied with spaces every 4 chars.
    return settings.smtp_password.replace(" ", "")


def _smtp_login_if_needed(server: smtplib.SMTP) -> None:
    password = _smtp_password()
    if settings.smtp_user and password:
        server.login(settings.smtp_user, password)


def _send_via_smtp_with(host: str, port: int, use_tls: bool, msg: EmailMessage, context: ssl.SSLContext) -> None:
    if use_tls:
        with smtplib.SMTP(host, port, timeout=15) as server:
            server.starttls(context=context)
            _smtp_login_if_needed(server)
            server.send_message(msg)
        return

    with smtplib.SMTP_SSL(host, port, context=context, timeout=15) as server:
        _smtp_login_if_needed(server)
        server.send_message(msg)


def build_feature_request_message(feature_name: str, user_email: str | None, client_ip: str | None) -> EmailMessage:
    recipient = settings.feature_request_recipient or ""
    sender = settings.smtp_from or settings.smtp_user or recipient
    requested_at = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")

    msg = EmailMessage()
    msg["Subject"] = f"Feature Request: {feature_name}"
    msg["From"] = sender
    msg["To"] = recipient

    lines = [
        f"New Feature Request: {feature_name}",
        "",
        f"Requested at: {requested_at}",
        f"User IP: {client_ip or 'unknown'}",
    ]
    if user_email:
        lines.append(f"User Email: {user_email} (wants to be notified when feature is available)")
        lines.extend(["", f"Remember to notify {user_email} when this feature is released!"])
    else:
        lines.append("User Email: Not provided")
    msg.set_content("\n".join(lines).strip())
    return msg


def _transports() -> list[tuple[int, bool]]:
    """(port, starttls) pairs to try in order; the fallback flips the mode."""
    attempts = [(settings.smtp_port, settings.smtp_use_tls)]
    if settings.smtp_fallback_ssl:
        attempts.append((465, False) if settings.smtp_use_tls else (587, True))
    return attempts


def send_feature_request_notice(feature_name: str, user_email: str | None, client_ip: str | None) -> bool:
    if not _smtp_ready():
        logger.info("feature_request_email_skipped feature=%s reason=smtp_not_configured", feature_name)
        return False

    msg = build_feature_request_message(feature_name, user_email, client_ip)
    context = ssl.create_default_context()
    host = settings.smtp_host or ""
    for attempt, (port, starttls) in enumerate(_transports()):
        mode = "STARTTLS" if starttls else "SSL"
        try:
            _send_via_smtp_with(host=host, port=port, use_tls=starttls, msg=msg, context=context)
        except Exception as exc:  # noqa: BLE001 - a failed notice must not fail the request
            logger.exception(
                "feature_request_email_failed host=%s port=%s mode=%s attempt=%s: %s",
                host,
                port,
                mode,
                attempt,
                exc,
            )
            continue
        logger.info(
            "feature_request_email_sent feature=%s host=%s port=%s mode=%s attempt=%s",
            feature_name,
            host,
            port,
            mode,
            attempt,
        )
        return True
    return False
