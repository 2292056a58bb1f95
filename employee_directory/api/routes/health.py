from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(request: Request) -> dict:
    """Liveness probe; never rate limited.

    Returns:
        dict: ``{"status": "ok", "tier": <"server" | "api">}``.
    """

    return {"status": "ok", "tier": getattr(request.app.state, "tier", "unknown")}
