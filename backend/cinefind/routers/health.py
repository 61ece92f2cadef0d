from datetime import datetime, timezone
from fastapi import APIRouter

from cinefind.schemas.movie import HealthResponse

router = APIRouter(tags=["health"])

SERVICE_NAME = "Movie Discovery API (OMDb)"

@router.get("/health", response_model=HealthResponse)
def health_check():
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return HealthResponse(status="OK", timestamp=timestamp, service=SERVICE_NAME)
