"""
Health check and index endpoints.
"""
import time
from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from ..models import HealthResponse

router = APIRouter()

INDEX_PAGE = (
    "<h2>Tweet Bot</h2>"
    "<ul>"
    '<li><a href="/auth">Authenticate with X</a></li>'
    '<li><a href="/tweet">Post a Tweet</a></li>'
    "</ul>"
)


@router.get("/", response_class=HTMLResponse)
async def index():
    return INDEX_PAGE


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "timestamp": time.time()}
