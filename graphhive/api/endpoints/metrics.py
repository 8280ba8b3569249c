from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from graphhive.observability.metrics import snapshot_named, snapshot_requests

router = APIRouter()


@router.get("/metrics/snapshot")
def metrics_snapshot():
    body = {"requests": snapshot_requests()}
    body.update(snapshot_named())
    return body


@router.get("/metrics")
def metrics_prometheus():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
