import asyncio
import logging

from fastapi import APIRouter, File, Form, Request, UploadFile, status

from resume_tailor.core.config import settings
from resume_tailor.core.errors import InputTooLong, ToolsError
from resume_tailor.core.rate_limit import client_address, rate_limit
from resume_tailor.schemas.tools import (
    AnalysisResponse,
    DocumentPairRequest,
    FeatureRequest,
    FeatureRequestResponse,
    FetchUrlRequest,
    FetchUrlResponse,
    FixIssueRequest,
    ResumeCountResponse,
)
from resume_tailor.services import tools_service
from resume_tailor.services.pdf_text import extract_pdf_text

router = APIRouter()
logger = logging.getLogger(__name__)


async def _read_upload(file: UploadFile) -> bytes:
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(1024 * 64)
        if not chunk:
            break
        total += len(chunk)
        if total > settings.max_upload_bytes:
            raise InputTooLong(
                f"File too large. Maximum allowed size is {settings.max_upload_bytes // (1024 * 1024)} MB.",
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            )
        chunks.append(chunk)
    return b"".join(chunks)


async def _document_text(upload: UploadFile | None, pasted: str | None) -> str | None:
    if upload is not None and upload.filename:
        content = await _read_upload(upload)
        return await asyncio.to_thread(extract_pdf_text, content)
    return pasted


@router.post("/analyze", response_model=AnalysisResponse)
@rate_limit(settings.llm_rate_limit)
async def analyze(
    request: Request,
    resume: UploadFile | None = File(default=None),
    job_posting: UploadFile | None = File(default=None, alias="jobPosting"),
    resume_text: str | None = Form(default=None, alias="resumeText"),
    job_posting_text: str | None = Form(default=None, alias="jobPostingText"),
):
    _ = request
    resume_value = await _document_text(resume, resume_text)
    job_value = await _document_text(job_posting, job_posting_text)
    return await asyncio.to_thread(tools_service.run_analysis, resume_value, job_value)


@router.post("/fetch-url", response_model=FetchUrlResponse)
@rate_limit()
async def fetch_url(request: Request, payload: FetchUrlRequest):
    _ = request
    return await asyncio.to_thread(tools_service.fetch_job_posting, payload.url)


@router.post("/optimize-ats")
@rate_limit(settings.llm_rate_limit)
async def optimize_ats(request: Request, payload: DocumentPairRequest):
    _ = request
    return await asyncio.to_thread(tools_service.run_ats_keywords, payload)


@router.post("/missing-qualifications")
@rate_limit(settings.llm_rate_limit)
async def missing_qualifications(request: Request, payload: DocumentPairRequest):
    _ = request
    return await asyncio.to_thread(tools_service.run_missing_qualifications, payload)


@router.post("/fix-issue")
@rate_limit(settings.llm_rate_limit)
async def fix_issue(request: Request, payload: FixIssueRequest):
    _ = request
    return await asyncio.to_thread(tools_service.run_fix_issue, payload)


@router.post("/request-feature", response_model=FeatureRequestResponse)
@rate_limit()
async def request_feature(request: Request, payload: FeatureRequest):
    return await asyncio.to_thread(tools_service.submit_feature_request, payload, client_address(request))


@router.get("/resume-count", response_model=ResumeCountResponse)
async def resume_count():
    try:
        count = await asyncio.to_thread(tools_service.resume_count)
    except Exception as exc:  # noqa: BLE001 - surfaced as a 500 with the legacy payload
        logger.exception("resume_count_failed")
        raise ToolsError("Failed to get resume count", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR) from exc
    return ResumeCountResponse(count=count)
