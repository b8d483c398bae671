"""
Health check endpoints, mounted by every service
"""
from fastapi import APIRouter, HTTPException, status
from datetime import datetime
from typing import Any, Callable, Dict


def build_health_router(service_name: str, check_db_connection: Callable[[], bool]) -> APIRouter:
    router = APIRouter(tags=["health"])

    @router.get("/health", status_code=status.HTTP_200_OK)
    async def health_check() -> Dict[str, Any]:
        """Liveness check; does not touch the database."""
        return {"status": "OK", "service": service_name}

    @router.get("/ready", status_code=status.HTTP_200_OK)
    def readiness_check() -> Dict[str, Any]:
        """
        Readiness check with database status.

        Raises:
            HTTPException: 503 if the database is unreachable
        """
        db_connected = check_db_connection()
        response = {
            "status": "ready" if db_connected else "not_ready",
            "service": service_name,
            "database": "connected" if db_connected else "disconnected",
            "timestamp": datetime.utcnow().isoformat()
        }
        if not db_connected:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=response)
        return response

    return router
