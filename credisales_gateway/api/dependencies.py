"""Dependency injection for FastAPI endpoints"""

from zoneinfo import ZoneInfo

from fastapi import Request
from credisales_gateway.config import settings
from credisales_gateway.infrastructure.clients.backend import BackendClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_backend_client() -> BackendClient:
    """Provide credit-sales backend client instance"""
    return BackendClient()


def get_timezone() -> ZoneInfo:
    """Time zone whose calendar day anchors generated schedules"""
    return settings.tzinfo
