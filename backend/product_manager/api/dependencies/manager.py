"""Product manager dependency."""

from fastapi import Request

from product_manager.services.product_manager import ProductManager


def get_manager(request: Request) -> ProductManager:
    """FastAPI dependency that returns the application's ProductManager."""
    return request.app.state.manager
