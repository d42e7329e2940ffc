from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Union

from resume_tailor.content.classifier import DocumentCategory, classify, similarity

logger = logging.getLogger(__name__)

SwapField = Literal["resume", "job_posting"]

NEAR_DUPLICATE_THRESHOLD = 0.8

RESUME_FIELD_MESSAGE = (
    'The content in "Your Resume" field appears to be a job posting, not a resume. '
    "Please make sure you uploaded/pasted your resume in the correct field."
)
JOB_FIELD_MESSAGE = (
    'The content in "Job Posting" field appears to be a resume, not a job posting. '
    "Please make sure you uploaded/pasted the job description in the correct field."
)


@dataclass(frozen=True)
class SwapAccepted:
    pass


@dataclass(frozen=True)
class SwapRejected:
    field: SwapField
    detected_as: DocumentCategory

    @property
    def message(self) -> str:
        return RESUME_FIELD_MESSAGE if self.field == "resume" else JOB_FIELD_MESSAGE


SwapVerdict = Union[SwapAccepted, SwapRejected]


def check_swap(resume_text: str, job_text: str) -> SwapVerdict:
    resume_doc = classify(resume_text)
    job_doc = classify(job_text)
    logger.debug(
        "swap_check resume=%s(%s/%s) job=%s(%s/%s)",
        resume_doc.category,
        resume_doc.resume_score,
        resume_doc.job_score,
        job_doc.category,
        job_doc.resume_score,
        job_doc.job_score,
    )

    if resume_doc.category == "job_posting":
        return SwapRejected(field="resume", detected_as="job_posting")
    if job_doc.category == "resume":
        return SwapRejected(field="job_posting", detected_as="resume")

    if resume_doc.category == "unknown" and job_doc.category == "unknown":
        # Same document pasted into both fields. Only the job-posting reading is
        # acted on here; a combined "resume" reading is let through.
        if similarity(resume_text, job_text) > NEAR_DUPLICATE_THRESHOLD:
            combined = classify(f"{resume_text} {job_text}")
            if combined.category == "job_posting":
                return SwapRejected(field="resume", detected_as="job_posting")

    return SwapAccepted()
