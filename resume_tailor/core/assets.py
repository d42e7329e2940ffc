from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from resume_tailor.core.config import settings

logger = logging.getLogger(__name__)

LANDING_PAGE = "landing.html"
TAILOR_PAGE = "index.html"

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def default_asset_candidates() -> list[Path]:
    """Ordered places the static site may live, most specific first."""
    candidates: list[Path] = []
    if settings.public_dir:
        candidates.append(Path(settings.public_dir))
    candidates.append(PROJECT_ROOT / "public")
    if settings.serverless:
        candidates.extend(
            [
                PROJECT_ROOT.parent / "public",
                Path.cwd() / "public",
                Path("/var/task/public"),
                Path("/var/task/src/public"),
                Path("/var/task/netlify/functions/public"),
            ]
        )
    else:
        candidates.append(Path.cwd() / "public")
    return list(dict.fromkeys(candidates))


def resolve_asset_root(candidates: Iterable[Path], *, marker: str = LANDING_PAGE) -> Path | None:
    tried: list[str] = []
    for candidate in candidates:
        path = Path(candidate)
        tried.append(str(path))
        if path.is_dir() and (path / marker).is_file():
            logger.info("asset_root_resolved path=%s", path)
            return path
    logger.warning("asset_root_missing tried=%s", tried)
    return None
