"""
Health Router - Health checks and system status endpoints
"""

from fastapi import APIRouter, Depends
from typing import Dict, Any

from api.dependencies import get_app_state, AppState

router = APIRouter()


@router.get("/ready")
def health_check_ready(state: AppState = Depends(get_app_state)) -> Dict[str, Any]:
    """
    Kubernetes readiness probe.

    Returns ready=True once the repository and the resource service are up.
    """
    status = state.get_status()

    return {
        "ready": state.is_ready(),
        "details": status
    }
