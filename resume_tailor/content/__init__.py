from .access_gate import AccessBlocked, AccessGated, AccessOk, AccessOutcome, detect_access_issue
from .classifier import ClassifiedText, DocumentCategory, classify, similarity
from .job_extractor import ExtractionResult, extract_job_text
from .normalizer import normalize_text
from .swap_guard import SwapAccepted, SwapRejected, SwapVerdict, check_swap

__all__ = [
    "normalize_text",
    "AccessOk",
    "AccessBlocked",
    "AccessGated",
    "AccessOutcome",
    "detect_access_issue",
    "ExtractionResult",
    "extract_job_text",
    "ClassifiedText",
    "DocumentCategory",
    "classify",
    "similarity",
    "SwapAccepted",
    "SwapRejected",
    "SwapVerdict",
    "check_swap",
]
