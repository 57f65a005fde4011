# medcon/modules/inventory/inventory_controller.py
"""Inventory controller with API routes."""

from typing import List

from fastapi import APIRouter, Depends

from medcon.auth.dependencies import get_current_identity
from medcon.auth.policy import Capability, can
from medcon.common.state import ClinicState, get_clinic_state
from medcon.common.utils.global_messages import GlobalMessages
from medcon.models.entities import Identity, Sale, Supplier

from . import inventory_service as service
from .schemas import (
    InventoryResponse, ProductActionResponse, ProductRequest, ProductResponse,
    SaleActionResponse, SaleRequest, SupplierActionResponse, SupplierRequest,
)

router = APIRouter(prefix="/inventory", tags=["Inventory"])


# ============================================================================
# PRODUCTS
# ============================================================================

@router.get("/products", response_model=InventoryResponse)
async def get_products(
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    """List stock. Cost prices and total value are shown only to inventory managers."""
    products = service.list_products(state, current_identity)
    show_cost = can(current_identity, Capability.MANAGE_INVENTORY)
    return InventoryResponse(
        products=[ProductResponse.from_product(p, show_cost) for p in products],
        total_value=service.inventory_value(state, current_identity) if show_cost else None,
    )


@router.get("/products/low-stock", response_model=List[ProductResponse])
async def get_low_stock(
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    """Products at or below their minimum stock."""
    show_cost = can(current_identity, Capability.MANAGE_INVENTORY)
    return [ProductResponse.from_product(p, show_cost) for p in service.low_stock(state, current_identity)]


@router.post("/products", response_model=ProductActionResponse, status_code=201)
async def create_product(
    request: ProductRequest,
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    product = service.create_product(state, current_identity, request)
    return ProductActionResponse(
        success=True, message="Product saved.", product=product, warning=state.persistence_warning
    )


@router.put("/products/{product_id}", response_model=ProductActionResponse)
async def update_product(
    product_id: str,
    request: ProductRequest,
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    product = service.update_product(state, current_identity, product_id, request)
    return ProductActionResponse(
        success=True, message="Product saved.", product=product, warning=state.persistence_warning
    )


@router.delete("/products/{product_id}", response_model=ProductActionResponse)
async def delete_product(
    product_id: str,
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    product = service.delete_product(state, current_identity, product_id)
    return ProductActionResponse(
        success=True, message="Product deleted.", product=product, warning=state.persistence_warning
    )


# ============================================================================
# SUPPLIERS
# ============================================================================

@router.get("/suppliers", response_model=List[Supplier])
async def get_suppliers(
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    return service.list_suppliers(state, current_identity)


@router.post("/suppliers", response_model=SupplierActionResponse, status_code=201)
async def create_supplier(
    request: SupplierRequest,
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    supplier = service.create_supplier(state, current_identity, request)
    return SupplierActionResponse(
        success=True, message="Supplier saved.", supplier=supplier, warning=state.persistence_warning
    )


@router.delete("/suppliers/{supplier_id}", response_model=SupplierActionResponse)
async def delete_supplier(
    supplier_id: str,
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    supplier = service.delete_supplier(state, current_identity, supplier_id)
    return SupplierActionResponse(
        success=True, message="Supplier deleted.", supplier=supplier, warning=state.persistence_warning
    )


# ============================================================================
# SALES
# ============================================================================

@router.get("/sales", response_model=List[Sale])
async def get_sales(
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    """Sales history, oldest first."""
    return service.list_sales(state, current_identity)


@router.post("/sales", response_model=SaleActionResponse, status_code=201)
async def register_sale(
    request: SaleRequest,
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    """Register a supply sale to a doctor; stock is decremented."""
    sale = service.register_sale(state, current_identity, request.doctor_id, request.items)
    return SaleActionResponse(
        success=True,
        message=GlobalMessages.SALE_REGISTERED,
        sale=sale,
        warning=state.persistence_warning,
    )
