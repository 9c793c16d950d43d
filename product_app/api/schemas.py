"""Request/response bodies of the HTTP API."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from product_app.domain.models import CategoryCreate, ProductCreate


class AddProductRequest(BaseModel):
    name: str = ""
    price: float = 0.0
    description: str = ""
    discount: float = 0.0
    store: str = ""
    image_urls: List[str] = Field(default_factory=list)
    category_id: Optional[int] = None

    def to_model(self) -> ProductCreate:
        return ProductCreate(**self.model_dump())


class CategoryRequest(BaseModel):
    name: str = ""
    description: str = ""

    def to_model(self) -> CategoryCreate:
        return CategoryCreate(name=self.name, description=self.description)


class CreatedResponse(BaseModel):
    id: int


class ErrorResponse(BaseModel):
    error_description: str
