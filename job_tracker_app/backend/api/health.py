"""
Health check and system status API endpoints.
"""
import logging
from typing import Dict, Any

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config.settings import get_settings
from ..models.db.database import get_db

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health", summary="Health Check")
def health_check(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """
    Report application status and whether the database answers.
    """
    settings = get_settings()
    database_ok = True
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Database health check failed: %s", str(e))
        database_ok = False

    health_status = {
        "status": "healthy" if database_ok else "degraded",
        "app_info": {
            "name": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
        },
        "database": {"reachable": database_ok},
    }

    config_issues = settings.validate_required_settings()
    if config_issues:
        health_status["status"] = "degraded"
        health_status["configuration_issues"] = config_issues
        logger.warning("Configuration issues found: %s", config_issues)

    return health_status
