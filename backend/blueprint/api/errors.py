# backend/blueprint/api/errors.py
from fastapi import HTTPException

from ..errors import BlueprintError, ConstraintViolation, NotFoundError


def to_http_exception(error: BlueprintError) -> HTTPException:
    """Map a service-layer error to the HTTP status the API reports"""
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, ConstraintViolation):
        return HTTPException(status_code=409, detail=str(error))
    return HTTPException(status_code=422, detail=str(error))
