"""
tenant_platform.modules.ecommerce

E-commerce module: product catalogue.
"""

from __future__ import annotations

from pydantic import Field

from tenant_platform.db.models import Product
from tenant_platform.modules.collections import (
    CollectionSpec,
    DocumentIn,
    DocumentPatch,
    build_module,
)


class ProductIn(DocumentIn):
    name: str = Field(min_length=1, max_length=256)


class ProductPatch(DocumentPatch):
    name: str | None = Field(default=None, min_length=1, max_length=256)


module = build_module(
    name="ecommerce",
    title="E-commerce",
    description="E-commerce module for product management, orders, and shopping cart",
    collections=[
        CollectionSpec(
            path="products",
            model=Product,
            create_schema=ProductIn,
            patch_schema=ProductPatch,
            label="Product",
        ),
    ],
)
