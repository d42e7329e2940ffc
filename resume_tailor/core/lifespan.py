from contextlib import asynccontextmanager
import logging

from resume_tailor.core.counter_store import init_counter_store
from resume_tailor.services.llm import llm_enabled

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    try:
        init_counter_store()
    except Exception as exc:  # pragma: no cover - counter is best effort at startup
        logger.warning("counter_store_init_failed: %s", exc)

    if not llm_enabled():
        logger.warning("OPENAI_API_KEY is not set; resume analysis endpoints will fail until it is configured.")

    yield
