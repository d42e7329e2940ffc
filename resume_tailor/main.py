import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk

from resume_tailor.api.health import router as health_router
from resume_tailor.api.pages import router as pages_router
from resume_tailor.api.tools import router as tools_router
from resume_tailor.core.assets import default_asset_candidates, resolve_asset_root
from resume_tailor.core.config import settings
from resume_tailor.core.cors import cors_allow_credentials, cors_allowed_origins
from resume_tailor.core.errors import ToolsError, request_validation_error_handler, tools_error_handler
from resume_tailor.core.lifespan import lifespan
from resume_tailor.core.rate_limit import limiter

logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

app = FastAPI(title="Resume Tailor API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allowed_origins(),
    allow_credentials=cors_allow_credentials(),
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(ToolsError, tools_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)
app.add_middleware(SlowAPIMiddleware)

app.include_router(health_router, prefix="/api", tags=["Health"])
app.include_router(tools_router, prefix="/api", tags=["Tools"])
app.include_router(pages_router, tags=["Pages"])

app.state.asset_root = resolve_asset_root(default_asset_candidates())
if app.state.asset_root is not None:
    app.mount("/", StaticFiles(directory=app.state.asset_root), name="static")


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
