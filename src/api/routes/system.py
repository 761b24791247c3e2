"""Service status and demo data routes."""

import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from config import API_PREFIX
from core.dependencies import DatabaseDep, DBSessionDep
from schemas.system import InitResponse, StatusResponse
from utils.seed import seed_database

logger = logging.getLogger(__name__)

router = APIRouter(prefix=API_PREFIX, tags=["System"])


@router.get("/status", response_model=StatusResponse, summary="Store connectivity")
def get_status(database: DatabaseDep) -> StatusResponse:
    return StatusResponse(db_connected=database.is_connected())


@router.post("/db/init", response_model=InitResponse, summary="Reset demo data")
def init_database(db: DBSessionDep) -> InitResponse:
    """Replace all users, assignments and submissions with generated demo data."""
    try:
        counts = seed_database(db)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Database initialization failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Database initialization failed: {e}",
        )
    return InitResponse(message="Database initialized", counts=counts)
