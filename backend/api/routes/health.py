from typing import Dict, Any
import time
import psutil
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...config import AppConfig
from ...storage.draft_store import DraftStore
from ..dependencies import get_config, get_store
from ..responses import success


router = APIRouter()


class HealthStatus(BaseModel):
    status: str  # "healthy", "degraded", "unhealthy"
    timestamp: datetime
    version: str
    uptime_seconds: float
    checks: Dict[str, Any]


class SystemMetrics(BaseModel):
    cpu_percent: float
    memory_percent: float
    memory_available_mb: float
    disk_usage_percent: float


# Track startup time for uptime calculation
_startup_time = time.time()


@router.get("/health")
async def health_check(config: AppConfig = Depends(get_config)):
    """
    Basic health check endpoint.

    Fast enough for load balancer probes: no system calls, no I/O.
    """
    uptime = time.time() - _startup_time

    return success(HealthStatus(status="healthy",
                                timestamp=datetime.now(timezone.utc),
                                version=config.version,
                                uptime_seconds=uptime,
                                checks={"api": "healthy", "player_source": config.player_source}))


@router.get("/health/detailed")
async def detailed_health_check(config: AppConfig = Depends(get_config),
                                store: DraftStore = Depends(get_store)):
    """
    Health check with system metrics and the number of drafts held in memory.
    """
    uptime = time.time() - _startup_time

    memory = psutil.virtual_memory()
    disk = psutil.disk_usage('/')

    system_metrics = SystemMetrics(
        cpu_percent=psutil.cpu_percent(interval=None),
        memory_percent=memory.percent,
        memory_available_mb=memory.available / 1024 / 1024,
        disk_usage_percent=disk.percent
    )

    process = psutil.Process()

    return success({
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": config.version,
        "uptime_seconds": uptime,
        "system_metrics": system_metrics.model_dump(),
        "process_memory_mb": process.memory_info().rss / 1024 / 1024,
        "active_drafts": len(await store.list_ids()),
    })
