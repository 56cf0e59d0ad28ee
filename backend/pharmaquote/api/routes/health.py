"""Health check endpoint."""

from fastapi import APIRouter

from ... import __version__
from ...api.dependencies import StoreDep


router = APIRouter(prefix="/api/v1", tags=["Health"])


@router.get("/health")
async def health_check(store: StoreDep) -> dict:
    """
    Health check endpoint.

    Returns:
        Health status and store statistics
    """
    return {
        "status": "healthy",
        "service": "Pharma quotation builder",
        "version": __version__,
        "store": store.get_stats(),
    }
