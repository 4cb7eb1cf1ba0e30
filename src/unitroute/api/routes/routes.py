"""Routing endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from ...schemas.routing import SolveRequest, SolveResponse
from ...services.routing.service import solve_points

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/solve", response_model=SolveResponse, status_code=status.HTTP_200_OK)
def solve(payload: SolveRequest) -> SolveResponse:
    """Order caller-supplied points; the first point is the fixed start."""
    try:
        return solve_points(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        import logging
        logging.exception(f"Error solving route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to solve route: {str(exc)}"
        ) from exc
