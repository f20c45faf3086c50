# fieldstock/core/exceptions.py
from fastapi import HTTPException, status
from typing import Any, Dict, Optional


class InventoryError(HTTPException):
    """Base for every business/infrastructure error raised by the services"""
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "inventory_error"
    default_detail = "Inventory operation failed"

    def __init__(self, detail: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail)
        self.details = details or {}


class ValidationError(InventoryError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "validation_error"
    default_detail = "Invalid input"


class AlreadySeeded(ValidationError):
    status_code = status.HTTP_409_CONFLICT
    error_code = "already_seeded"
    default_detail = "Item type registry is not empty"


class NotFound(InventoryError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "not_found"
    default_detail = "Resource not found"


class AlreadyProcessed(InventoryError):
    status_code = status.HTTP_409_CONFLICT
    error_code = "already_processed"
    default_detail = "Transfer request was already processed"


class InsufficientStock(InventoryError):
    status_code = status.HTTP_409_CONFLICT
    error_code = "insufficient_stock"
    default_detail = "Insufficient stock"


class PersistenceError(InventoryError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "persistence_error"
    default_detail = "Database operation failed"
