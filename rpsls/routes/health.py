"""
Health and status route handlers.
"""
from fastapi import APIRouter

from rpsls import __version__

router = APIRouter()

@router.get("/healthz")
def healthz():
    """Health check endpoint"""
    return {"ok": True, "version": __version__}
