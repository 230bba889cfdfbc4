"""Prometheus scrape endpoint."""

from __future__ import annotations

from fastapi import APIRouter
from prometheus_client import CONTENT_TYPE_LATEST
from starlette.responses import Response

from syllabus.observability.metrics import get_metrics

router = APIRouter(tags=["observability"])


@router.get("/metrics", response_class=Response, include_in_schema=False)
async def scrape() -> Response:
    return Response(content=get_metrics().generate_latest(), media_type=CONTENT_TYPE_LATEST)
