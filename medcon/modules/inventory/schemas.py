# medcon/modules/inventory/schemas.py
"""Inventory module Pydantic schemas."""

from typing import List, Optional
from pydantic import BaseModel, Field

from medcon.models.entities import Product, Sale, Supplier


# ============================================================================
# REQUEST SCHEMAS
# ============================================================================

class ProductRequest(BaseModel):
    name: str
    cost_price: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    sell_price: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    stock: int = Field(default=0, ge=0)
    min_stock: int = Field(default=5, ge=0)
    supplier_id: Optional[str] = None


class SupplierRequest(BaseModel):
    name: str
    contact: str = ""
    phone: str = ""


class CartItem(BaseModel):
    product_id: str
    quantity: int = Field(default=1, gt=0)


class SaleRequest(BaseModel):
    doctor_id: str
    items: List[CartItem]


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================

class ProductResponse(BaseModel):
    """Product row; cost price is hidden from roles that cannot manage stock."""
    id: str
    name: str
    cost_price: Optional[float] = None
    sell_price: float
    stock: int
    min_stock: int
    supplier_id: Optional[str] = None
    low_stock: bool = False

    @classmethod
    def from_product(cls, product: Product, show_cost: bool) -> "ProductResponse":
        data = product.model_dump()
        if not show_cost:
            data["cost_price"] = None
        return cls(**data, low_stock=product.stock <= product.min_stock)


class InventoryResponse(BaseModel):
    products: List[ProductResponse]
    total_value: Optional[float] = None


class ProductActionResponse(BaseModel):
    success: bool
    message: str
    product: Optional[Product] = None
    warning: Optional[str] = None


class SupplierActionResponse(BaseModel):
    success: bool
    message: str
    supplier: Optional[Supplier] = None
    warning: Optional[str] = None


class SaleActionResponse(BaseModel):
    success: bool
    message: str
    sale: Optional[Sale] = None
    warning: Optional[str] = None
