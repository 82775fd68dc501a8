from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from users_api.core.config import get_settings

router = APIRouter(prefix="", tags=["pages"])


@router.get("/", response_class=HTMLResponse)
def home():
    port = get_settings().port
    return HTMLResponse(
        "<h1>Welcome to the Users API (v1)</h1>\n"
        "<p>A small API for managing user records.</p>\n"
        f"<p>Running on port: {port}</p>\n"
    )
