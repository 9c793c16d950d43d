"""
FastAPI application for the product catalog.

Run with the factory so nothing touches the database at import time:
    uvicorn product_app.api.main:create_app --factory
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, Path, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from loguru import logger
from sqlalchemy.engine import Engine

from product_app.api.deps import get_category_service, get_product_service
from product_app.api.schemas import AddProductRequest, CategoryRequest, CreatedResponse, ErrorResponse
from product_app.config import Settings, get_settings
from product_app.db.models import MAX_ID
from product_app.db.session import build_session_factory, create_schema, db_healthcheck, get_engine
from product_app.domain.models import Category, Product
from product_app.errors import ErrorKind, ProductAppError
from product_app.log_config import configure_logging
from product_app.persistence.category_repository import CategoryRepository
from product_app.persistence.product_repository import ProductRepository
from product_app.services.category_service import CategoryService
from product_app.services.product_service import ProductService

openapi_tags = [
    {"name": "Health", "description": "Service and dependency health checks."},
    {"name": "Products", "description": "Product catalog with ordered product images."},
    {"name": "Categories", "description": "Product categories."},
]

_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.PERSISTENCE: 500,
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error_description=message).model_dump())


async def _handle_app_error(request: Request, exc: ProductAppError) -> JSONResponse:
    if exc.kind is ErrorKind.PERSISTENCE:
        logger.opt(exception=exc).error("{} {} failed", request.method, request.url.path)
    return _error(_STATUS_BY_KIND[exc.kind], exc.message)


# PUBLIC_INTERFACE
def create_app(engine: Optional[Engine] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the API around `engine` (the configured database when omitted)."""
    settings = settings or get_settings()
    engine = engine or get_engine()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings)
        if settings.create_schema:
            create_schema(engine)
        yield
        engine.dispose()

    app = FastAPI(
        title="Product Catalog API",
        description="Products with ordered images, filtered by store or category.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    session_factory = build_session_factory(engine)
    category_repository = CategoryRepository(session_factory)
    app.state.engine = engine
    app.state.product_service = ProductService(
        ProductRepository(session_factory),
        category_repository,
        require_description=settings.require_description,
    )
    app.state.category_service = CategoryService(category_repository)

    app.add_exception_handler(ProductAppError, _handle_app_error)

    _register_health_routes(app)
    _register_product_routes(app)
    _register_category_routes(app)
    return app


def _register_health_routes(app: FastAPI) -> None:
    @app.get("/", tags=["Health"], summary="Service health check")
    def health_check():
        """Basic health check for the backend service (no external dependencies)."""
        return {"message": "Healthy"}

    @app.get("/health/db", tags=["Health"], summary="Database health check")
    def health_db_check(request: Request):
        """Check database connectivity."""
        ok = db_healthcheck(request.app.state.engine)
        return {"database": "ok" if ok else "unreachable", "ok": ok}


def _register_product_routes(app: FastAPI) -> None:
    @app.get("/api/v1/products/{product_id}", tags=["Products"], response_model=Product)
    def get_product_by_id(
        product_id: int = Path(le=MAX_ID),
        service: ProductService = Depends(get_product_service),
    ):
        if product_id <= 0:
            return _error(status.HTTP_400_BAD_REQUEST, f"Invalid product id {product_id}")
        return service.get_by_id(product_id)

    @app.get("/api/v1/products", tags=["Products"], response_model=List[Product])
    def get_all_products(
        store: Optional[str] = None,
        category_id: Optional[int] = Query(default=None, gt=0, le=MAX_ID),
        service: ProductService = Depends(get_product_service),
    ):
        """All products, or only those of `store` / `category_id` when given."""
        if category_id is not None:
            return service.get_products_by_category_id(category_id)
        if store:
            return service.get_all_products_by_store(store)
        return service.get_all_products()

    @app.post(
        "/api/v1/products",
        tags=["Products"],
        status_code=status.HTTP_201_CREATED,
        response_model=CreatedResponse,
    )
    def add_product(body: AddProductRequest, service: ProductService = Depends(get_product_service)):
        return CreatedResponse(id=service.add(body.to_model()))

    @app.put("/api/v1/products/{product_id}", tags=["Products"])
    def update_price(
        product_id: int = Path(le=MAX_ID),
        new_price: Optional[str] = Query(default=None, alias="newPrice"),
        service: ProductService = Depends(get_product_service),
    ):
        if not new_price:
            return _error(status.HTTP_400_BAD_REQUEST, "Parameter newPrice is required!")
        try:
            converted_price = float(new_price)
        except ValueError:
            return _error(status.HTTP_400_BAD_REQUEST, "NewPrice Format Disrupted!")
        service.update_price(product_id, converted_price)
        return Response(status_code=status.HTTP_200_OK)

    # Registered before /{product_id} so "deleteAll" is not parsed as an id.
    @app.delete("/api/v1/products/deleteAll", tags=["Products"])
    def delete_all_products(service: ProductService = Depends(get_product_service)):
        service.delete_all_products()
        return Response(status_code=status.HTTP_200_OK)

    @app.delete("/api/v1/products/{product_id}", tags=["Products"])
    def delete_product_by_id(
        product_id: int = Path(le=MAX_ID),
        service: ProductService = Depends(get_product_service),
    ):
        service.delete_by_id(product_id)
        return Response(status_code=status.HTTP_200_OK)


def _register_category_routes(app: FastAPI) -> None:
    @app.get("/api/v1/categories", tags=["Categories"], response_model=List[Category])
    def get_all_categories(service: CategoryService = Depends(get_category_service)):
        return service.get_all_categories()

    @app.get("/api/v1/categories/{category_id}", tags=["Categories"], response_model=Category)
    def get_category_by_id(
        category_id: int = Path(le=MAX_ID),
        service: CategoryService = Depends(get_category_service),
    ):
        return service.get_by_id(category_id)

    @app.post(
        "/api/v1/categories",
        tags=["Categories"],
        status_code=status.HTTP_201_CREATED,
        response_model=CreatedResponse,
    )
    def add_category(body: CategoryRequest, service: CategoryService = Depends(get_category_service)):
        return CreatedResponse(id=service.add_category(body.to_model()))

    @app.put("/api/v1/categories/{category_id}", tags=["Categories"])
    def update_category(
        body: CategoryRequest,
        category_id: int = Path(le=MAX_ID),
        service: CategoryService = Depends(get_category_service),
    ):
        service.update_category(category_id, body.to_model())
        return Response(status_code=status.HTTP_200_OK)

    @app.delete("/api/v1/categories/{category_id}", tags=["Categories"])
    def delete_category_by_id(
        category_id: int = Path(le=MAX_ID),
        service: CategoryService = Depends(get_category_service),
    ):
        service.delete_by_id(category_id)
        return Response(status_code=status.HTTP_200_OK)
