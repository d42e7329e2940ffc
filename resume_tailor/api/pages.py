from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, JSONResponse

from resume_tailor.core.assets import LANDING_PAGE, TAILOR_PAGE

router = APIRouter()


def _page(request: Request, name: str):
    asset_root: Path | None = getattr(request.app.state, "asset_root", None)
    if asset_root is None or not (asset_root / name).is_file():
        return JSONResponse(status_code=404, content={"error": "Page not found."})
    return FileResponse(asset_root / name, media_type="text/html")


@router.get("/", include_in_schema=False)
async def landing(request: Request):
    return _page(request, LANDING_PAGE)


@router.get("/tailor", include_in_schema=False)
async def tailor(request: Request):
    return _page(request, TAILOR_PAGE)
