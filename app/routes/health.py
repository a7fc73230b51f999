"""
Health check endpoint for the application.

Description:
This module defines a FastAPI route for checking the health status of the application
and its database connection.

Arguments:
- request: An instance of Request, required for rate limiting.

Returns:
- A JSON response such as {"status": "ok", "database": "ok"}. When the database
  cannot be reached the status is "degraded" and the response code is 503.

Dependencies:
- fastapi: For creating the FastAPI application and defining routes.
- app.core.route_limiters: For rate limiting functionality.
- app.database: For the connectivity check.
- app.schemas.health_response: For defining the response model.
- loguru: For logging information about the health check endpoint.
"""
from fastapi import APIRouter, Request, Response
from app.core.route_limiters import limiter
from app.database import check_database_connection
from app.schemas.health_response import HealthResponse
from loguru import logger

router = APIRouter(
    prefix="/api",
    tags=["health"],
    responses={404: {"description": "Not found"}}
)

@router.get("/health", response_model=HealthResponse)
@limiter.limit("10/minute")  # Custom limit for this endpoint
async def health(request: Request, response: Response):
    """
    Request parameter is required for rate limiting.
    """
    logger.info("Health check endpoint called")
    if check_database_connection():
        return HealthResponse(status="ok", database="ok")

    response.status_code = 503
    return HealthResponse(status="degraded", database="unavailable")
