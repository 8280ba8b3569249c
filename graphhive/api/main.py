from __future__ import annotations

from fastapi import FastAPI

from graphhive import __version__
from graphhive.api.endpoints import health
from graphhive.api.endpoints import metrics as metrics_ep
from graphhive.api.endpoints.job_conf import router as job_conf_router
from graphhive.api.middleware.error_shaping import SafeErrorMiddleware
from graphhive.api.middleware.request_id import RequestIdMiddleware

app = FastAPI(
    title="graphhive job configuration API",
    version=__version__,
)

# Starlette reverses add_middleware order: the LAST call is the OUTERMOST wrapper.
app.add_middleware(RequestIdMiddleware)
app.add_middleware(SafeErrorMiddleware)

app.include_router(health.router)
app.include_router(metrics_ep.router)
app.include_router(job_conf_router)
