"""Core schemas for the application."""

from typing import Any, Dict, List

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exposing camelCase JSON keys for snake_case attributes."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class HealthCheck(CamelModel):
    """Schema for health check response."""
    service_name: str
    status: str


class ErrorResponse(BaseModel):
    """Schema for error responses."""
    detail: str


class ValidationErrorResponse(ErrorResponse):
    """Schema for validation error responses with field level errors."""
    errors: List[Dict[str, Any]]
