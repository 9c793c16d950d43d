"""FastAPI dependencies resolving the services stored on the application state."""

from fastapi import Request

from product_app.services.category_service import CategoryService
from product_app.services.product_service import ProductService


def get_product_service(request: Request) -> ProductService:
    return request.app.state.product_service


def get_category_service(request: Request) -> CategoryService:
    return request.app.state.category_service
