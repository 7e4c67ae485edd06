"""Web UI route for YC Scout: a single search page that shows raw JSON."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

_TEMPLATE_DIR = Path(__file__).resolve().parent / "web_templates"
templates = Jinja2Templates(directory=str(_TEMPLATE_DIR))

web_router = APIRouter(tags=["web"])

DEFAULT_QUERY = "top 5 developer tool companies"


@web_router.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    """Render the search page."""
    return templates.TemplateResponse(request, "index.html", {"default_query": DEFAULT_QUERY})
