"""
Snippet Summarizer Backend — Health Check Route
================================================

What:  Liveness endpoint for Docker health checks and load balancer probes.
How:   Answers as long as the process is serving requests. It does not probe
       the store or Gemini: a Gemini outage must not take the read paths out
       of rotation, and probing Gemini would spend quota.
"""

from fastapi import APIRouter

from app.schemas.snippet import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok")
