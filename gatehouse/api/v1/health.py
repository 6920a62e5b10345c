"""Health check: database connectivity and whether the token codec is loaded."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from gatehouse.core.config import settings
from gatehouse.core.database import check_db_connected, get_db
from gatehouse.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> HealthResponse:
    """Used by load balancers and monitoring. Never exposes secret values."""
    codec_loaded = getattr(request.app.state, "token_codec", None) is not None
    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
        signing_keys="loaded" if codec_loaded else "missing",
    )
