from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


def _is_serverless() -> bool:
    return bool(_get_env("AWS_LAMBDA_FUNCTION_NAME") or _get_env("NETLIFY"))


@dataclass(frozen=True)
class Settings:
    log_level: str
    host: str
    port: int
    sentry_dsn: str | None
    rate_limit: str
    llm_rate_limit: str
    rate_limit_enabled: bool
    cors_allowed_origins: tuple[str, ...]
    cors_allow_credentials: bool
    serverless: bool
    public_dir: str | None
    counter_db_path: str
    fetch_timeout_s: float
    max_fetch_bytes: int
    max_resume_chars: int
    max_job_posting_chars: int
    max_upload_bytes: int
    smtp_host: str | None
    smtp_port: int
    smtp_user: str | None
    smtp_password: str | None
    smtp_from: str | None
    smtp_use_tls: bool
    smtp_fallback_ssl: bool
    feature_request_recipient: str | None


_SERVERLESS = _is_serverless()

settings = Settings(
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    host=_get_env("HOST", "0.0.0.0") or "0.0.0.0",
    port=_get_env_int("PORT", 8000),
    sentry_dsn=_get_env("SENTRY_DSN"),
    rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
    llm_rate_limit=_get_env("LLM_RATE_LIMIT", "10/minute") or "10/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    cors_allowed_origins=_get_env_list("CORS_ALLOWED_ORIGINS", ["*"]),
    cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", False),
    serverless=_SERVERLESS,
    public_dir=_get_env("PUBLIC_DIR"),
    counter_db_path=_get_env(
        "COUNTER_DB_PATH",
        "/tmp/resume_counter.db" if _SERVERLESS else "data/resume_counter.db",
    )
    or "data/resume_counter.db",
    fetch_timeout_s=_get_env_float("FETCH_TIMEOUT_S", 10.0),
    max_fetch_bytes=_get_env_int("MAX_FETCH_BYTES", 5 * 1024 * 1024),
    max_resume_chars=_get_env_int("MAX_RESUME_CHARS", 20000),
    max_job_posting_chars=_get_env_int("MAX_JOB_POSTING_CHARS", 10000),
    max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 10 * 1024 * 1024),
    smtp_host=_get_env("SMTP_HOST"),
    smtp_port=_get_env_int("SMTP_PORT", 587),
    smtp_user=_get_env("SMTP_USER") or _get_env("EMAIL_USER"),
    smtp_password=_get_env("SMTP_PASSWORD") or _get_env("EMAIL_PASS"),
    smtp_from=_get_env("SMTP_FROM"),
    smtp_use_tls=_get_env_bool("SMTP_USE_TLS", True),
    smtp_fallback_ssl=_get_env_bool("SMTP_FALLBACK_SSL", True),
    feature_request_recipient=_get_env("FEATURE_REQUEST_RECIPIENT"),
)

if settings.max_resume_chars <= 0 or settings.max_job_posting_chars <= 0:
    raise RuntimeError("MAX_RESUME_CHARS and MAX_JOB_POSTING_CHARS must be positive.")
