"""Domain entities passed between the HTTP layer, the services and the stores."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class ProductCreate(BaseModel):
    """Candidate product, not yet validated or persisted."""

    name: str = ""
    price: float = 0.0
    description: str = ""
    discount: float = 0.0
    store: str = ""
    image_urls: List[str] = Field(default_factory=list)
    category_id: Optional[int] = None


class Product(BaseModel):
    """A persisted product with its images resolved in display order."""

    id: int
    name: str
    price: float
    description: str = ""
    discount: float = 0.0
    store: str
    image_urls: List[str] = Field(default_factory=list)
    category_id: Optional[int] = None

    @property
    def main_image_url(self) -> Optional[str]:
        return self.image_urls[0] if self.image_urls else None


class CategoryCreate(BaseModel):
    name: str = ""
    description: str = ""


class Category(BaseModel):
    id: int
    name: str
    description: str
