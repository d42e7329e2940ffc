from __future__ import annotations

import logging
from typing import Any

from resume_tailor.content import access_gate
from resume_tailor.content.job_extractor import extract_job_text
from resume_tailor.content.swap_guard import SwapRejected, check_swap
from resume_tailor.core import counter_store
from resume_tailor.core.config import settings
from resume_tailor.core.errors import (
    ACCESS_REQUIRED,
    NOT_FOUND,
    AccessBlocked,
    ContentTooLong,
    FetchFailed,
    InputTooLong,
    InputValidationError,
    LLMError,
    SwapDetected,
)
from resume_tailor.integrations.email import send_feature_request_notice
from resume_tailor.schemas.tools import (
    AnalysisResponse,
    DocumentPairRequest,
    FeatureRequest,
    FeatureRequestResponse,
    FetchUrlResponse,
    FixIssueRequest,
)
from resume_tailor.services import llm, prompts
from resume_tailor.services.fetcher import fetch_page

logger = logging.getLogger(__name__)

MIN_DOCUMENT_CHARS = 50
RESUME_PREVIEW_CHARS = 5000
JOB_POSTING_PREVIEW_CHARS = 2000

ACCESS_REQUIRED_MESSAGE = (
    "This URL requires login or special access. Please use one of these alternatives:\n\n"
    '1. Copy the job description text from the page and paste it using "Paste Text"\n'
    '2. Save the page as a PDF and upload it using "Upload"'
)
NOT_FOUND_MESSAGE = (
    "This URL could not be found (404 error). Please check the URL and try again, "
    "or paste the job description text directly."
)


def _validate_document_lengths(resume_text: str, job_text: str) -> None:
    if len(resume_text.strip()) < MIN_DOCUMENT_CHARS:
        raise InputValidationError(
            "Resume text is too short. Please provide a valid resume (minimum 50 characters)."
        )
    if len(resume_text) > settings.max_resume_chars:
        raise InputTooLong(
            f"Resume text is too long. Maximum {settings.max_resume_chars:,} characters allowed. "
            f"Your text has {len(resume_text):,} characters. Please shorten your text and try again."
        )
    if len(job_text.strip()) < MIN_DOCUMENT_CHARS:
        raise InputValidationError(
            "Job posting text is too short. Please provide a valid job description (minimum 50 characters)."
        )
    if len(job_text) > settings.max_job_posting_chars:
        raise InputTooLong(
            f"Job posting text is too long. Maximum {settings.max_job_posting_chars:,} characters allowed. "
            f"Your text has {len(job_text):,} characters. Please shorten your text and try again."
        )


def ensure_not_swapped(resume_text: str, job_text: str) -> None:
    verdict = check_swap(resume_text, job_text)
    if isinstance(verdict, SwapRejected):
        logger.info("swap_detected field=%s detected_as=%s", verdict.field, verdict.detected_as)
        raise SwapDetected(verdict.message, field=verdict.field, detected_as=verdict.detected_as)


def _require_object(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise LLMError("Failed to parse AI response. The AI may not have returned valid JSON.", reason="llm_invalid")
    return payload


def run_analysis(resume_text: str | None, job_text: str | None) -> AnalysisResponse:
    if not resume_text:
        raise InputValidationError("No resume provided. Please upload a file or provide text.")
    if not job_text:
        raise InputValidationError("No job posting provided. Please upload a file or provide text.")

    _validate_document_lengths(resume_text, job_text)
    ensure_not_swapped(resume_text, job_text)

    analysis = _require_object(
        llm.json_completion(
            system_prompt=prompts.MATCH_ANALYSIS_SYSTEM,
            user_prompt=prompts.match_analysis_prompt(resume_text, job_text),
            max_output_tokens=2000,
            tool_slug="analyze",
        )
    )

    try:
        counter_store.increment()
    except Exception:  # noqa: BLE001 - the counter must not fail a finished analysis
        logger.exception("resume_counter_increment_failed")

    return AnalysisResponse(
        analysis=analysis,
        resume_text=resume_text[:RESUME_PREVIEW_CHARS],
        job_posting_text=job_text[:JOB_POSTING_PREVIEW_CHARS],
    )


def _raise_for_access(outcome: access_gate.AccessOutcome) -> str:
    if isinstance(outcome, access_gate.AccessOk):
        return outcome.html
    if isinstance(outcome, access_gate.AccessGated):
        logger.info("fetch_gated reason=%s", outcome.reason)
        raise AccessBlocked(ACCESS_REQUIRED_MESSAGE, reason=outcome.reason, code=ACCESS_REQUIRED)
    logger.info("fetch_blocked reason=%s status=%s", outcome.reason, outcome.status_code)
    if outcome.reason == "auth_required":
        raise AccessBlocked(ACCESS_REQUIRED_MESSAGE, reason=outcome.reason, code=ACCESS_REQUIRED)
    if outcome.reason == "not_found":
        raise AccessBlocked(NOT_FOUND_MESSAGE, reason=outcome.reason, code=NOT_FOUND)
    raise FetchFailed(f"Failed to fetch URL: HTTP error! status: {outcome.status_code}")


def fetch_job_posting(url: str | None) -> FetchUrlResponse:
    if not url or not isinstance(url, str):
        raise InputValidationError("Valid URL is required.")

    page = fetch_page(url)
    page_html = _raise_for_access(access_gate.detect_access_issue(page.status_code, page.text))

    limit = settings.max_job_posting_chars
    result = extract_job_text(page_html, max_chars=limit)
    if result.truncated:
        raise ContentTooLong(
            f"The content from this URL is too long (over {limit:,} characters). "
            "Please paste the job description text directly instead."
        )
    return FetchUrlResponse(content=result.text)


def _require_pair(payload: DocumentPairRequest) -> None:
    if not payload.resume or not payload.job_posting:
        raise InputValidationError("Resume and job posting are required.")


def run_ats_keywords(payload: DocumentPairRequest) -> dict[str, Any]:
    _require_pair(payload)
    return _require_object(
        llm.json_completion(
            system_prompt=prompts.ATS_KEYWORDS_SYSTEM,
            user_prompt=prompts.ats_keywords_prompt(payload.resume, payload.job_posting),
            max_output_tokens=1000,
            tool_slug="optimize-ats",
        )
    )


def run_missing_qualifications(payload: DocumentPairRequest) -> dict[str, Any]:
    _require_pair(payload)
    return _require_object(
        llm.json_completion(
            system_prompt=prompts.MISSING_QUALIFICATIONS_SYSTEM,
            user_prompt=prompts.missing_qualifications_prompt(payload.resume, payload.job_posting),
            max_output_tokens=1000,
            tool_slug="missing-qualifications",
        )
    )


def run_fix_issue(payload: FixIssueRequest) -> dict[str, Any]:
    if not payload.issue_title or not payload.resume or not payload.job_posting:
        raise InputValidationError("Issue title, resume, and job posting are required.")
    return _require_object(
        llm.json_completion(
            system_prompt=prompts.FIX_ISSUE_SYSTEM,
            user_prompt=prompts.fix_issue_prompt(
                payload.issue_title,
                payload.issue_description,
                payload.resume,
                payload.job_posting,
            ),
            max_output_tokens=1500,
            tool_slug="fix-issue",
        )
    )


def submit_feature_request(payload: FeatureRequest, client_ip: str | None) -> FeatureRequestResponse:
    feature_name = (payload.feature_name or "").strip()
    if not feature_name:
        raise InputValidationError("Feature name is required.")
    user_email = (payload.user_email or "").strip() or None

    sent = send_feature_request_notice(feature_name, user_email, client_ip)
    logger.info("feature_request feature=%s notified=%s has_email=%s", feature_name, sent, bool(user_email))
    return FeatureRequestResponse(
        message="Feature request submitted successfully.",
        feature_name=feature_name,
        user_email=user_email,
    )


def resume_count() -> int:
    return counter_store.get_count()
