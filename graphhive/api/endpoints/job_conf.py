from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from graphhive.common.hive_utils import parse_partition_values
from graphhive.core.job_conf import JobConfRequest, compile_job_conf
from graphhive.observability.metrics import inc_named

# Errors raised here are shaped into 400 responses by SafeErrorMiddleware.
router = APIRouter(prefix="/api/v1", tags=["job_conf"])

FILES_ROOT_ENV = "GRAPHHIVE_FILES_ROOT"


class PartitionParseRequest(BaseModel):
    partition: Optional[str] = None


def files_root() -> Path:
    """Catalog files and resource dirs named by HTTP requests must live under this directory."""
    return Path(os.getenv(FILES_ROOT_ENV) or Path.cwd())


@router.post("/job-conf/compile")
def compile_conf(req: JobConfRequest):
    compiled = compile_job_conf(req, files_root=files_root())
    inc_named("job_conf_compiled")
    return compiled.as_dict()


@router.post("/partitions/parse")
def parse_partition(req: PartitionParseRequest):
    return {"partition": req.partition, "values": parse_partition_values(req.partition)}
