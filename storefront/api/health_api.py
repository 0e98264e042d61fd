from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from supabase import Client

from storefront.api.dependencies import get_supabase_client
from storefront.core.config import Settings, get_settings
from storefront.database.supabase_client import check_connection

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(config: Settings = Depends(get_settings)):
    """存活检查，不访问数据库"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": config.APP_VERSION,
    }


@router.get("/health/db")
def database_health_check(db: Client = Depends(get_supabase_client)):
    """数据库连通性检查"""
    healthy = check_connection(db)
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "services": {"database": "healthy" if healthy else "unhealthy"},
        },
    )
