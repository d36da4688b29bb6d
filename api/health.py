import logging

from flask import Blueprint
from sqlalchemy.exc import SQLAlchemyError

from models import storage

logger = logging.getLogger(__name__)

bp = Blueprint("health", __name__)


@bp.get("/health")
def health():
    """
    Health check
    ---
    tags:
      - Health
    responses:
      200:
        description: API is up
        schema:
          type: object
          properties:
            status:
              type: string
              example: UP
            message:
              type: string
              example: Application is running
    """
    return {"status": "UP", "message": "Application is running"}, 200


@bp.get("/health/db")
def db_health():
    """
    Database connectivity check
    ---
    tags:
      - Health
    responses:
      200:
        description: Database reachable
      503:
        description: Database unreachable
    """
    try:
        storage.ping()
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        return {"status": "DOWN", "database": "Connection failed"}, 503
    return {"status": "UP", "database": "Connected successfully"}, 200
