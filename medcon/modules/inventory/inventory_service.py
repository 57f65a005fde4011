# medcon/modules/inventory/inventory_service.py
"""
Inventory and supply sales.

A sale follows the same shape as a visit bill: prices are snapshotted onto
the sale at the moment it is registered, and the product stock is
decremented in the same step.
"""

import logging
from typing import List, Sequence

from medcon.auth.policy import Capability, authorize
from medcon.common.errors import ReferenceNotFoundError, ValidationError
from medcon.common.state import ClinicState
from medcon.common.utils.global_functions import new_id
from medcon.common.utils.global_messages import GlobalMessages
from medcon.models.entities import Identity, Product, Sale, SaleItem, Supplier

from .schemas import CartItem, ProductRequest, SupplierRequest

logger = logging.getLogger(__name__)


def _check_supplier(state: ClinicState, supplier_id) -> None:
    if supplier_id and state.find_supplier(supplier_id) is None:
        raise ReferenceNotFoundError(GlobalMessages.SUPPLIER_NOT_FOUND)


# ============================================================================
# PRODUCTS
# ============================================================================

def list_products(state: ClinicState, identity: Identity) -> List[Product]:
    authorize(identity, Capability.VIEW_INVENTORY)
    return list(state.products)


def low_stock(state: ClinicState, identity: Identity) -> List[Product]:
    authorize(identity, Capability.VIEW_INVENTORY)
    return [p for p in state.products if p.stock <= p.min_stock]


def inventory_value(state: ClinicState, identity: Identity) -> float:
    """Cost value of everything in stock."""
    authorize(identity, Capability.MANAGE_INVENTORY)
    return sum(p.cost_price * p.stock for p in state.products)


def create_product(state: ClinicState, identity: Identity, request: ProductRequest) -> Product:
    authorize(identity, Capability.MANAGE_INVENTORY)
    if not request.name.strip():
        raise ValidationError("Product name is required.")
    _check_supplier(state, request.supplier_id)

    product = Product(id=new_id(), **request.model_dump(exclude={"name"}), name=request.name.strip())
    state.products.append(product)
    state.persist("products")
    logger.info("Product %s created", product.id)
    return product


def update_product(state: ClinicState, identity: Identity, product_id: str, request: ProductRequest) -> Product:
    authorize(identity, Capability.MANAGE_INVENTORY)
    product = state.find_product(product_id)
    if product is None:
        raise ReferenceNotFoundError(GlobalMessages.PRODUCT_NOT_FOUND)
    if not request.name.strip():
        raise ValidationError("Product name is required.")
    _check_supplier(state, request.supplier_id)

    updated = Product(id=product.id, **request.model_dump(exclude={"name"}), name=request.name.strip())
    state.products[state.products.index(product)] = updated
    state.persist("products")
    return updated


def delete_product(state: ClinicState, identity: Identity, product_id: str) -> Product:
    authorize(identity, Capability.MANAGE_INVENTORY)
    product = state.find_product(product_id)
    if product is None:
        raise ReferenceNotFoundError(GlobalMessages.PRODUCT_NOT_FOUND)
    state.products = [p for p in state.products if p.id != product_id]
    state.persist("products")
    return product


# ============================================================================
# SUPPLIERS
# ============================================================================

def list_suppliers(state: ClinicState, identity: Identity) -> List[Supplier]:
    authorize(identity, Capability.VIEW_INVENTORY)
    return list(state.suppliers)


def create_supplier(state: ClinicState, identity: Identity, request: SupplierRequest) -> Supplier:
    authorize(identity, Capability.MANAGE_INVENTORY)
    if not request.name.strip():
        raise ValidationError("Supplier name is required.")
    supplier = Supplier(id=new_id(), name=request.name.strip(), contact=request.contact, phone=request.phone)
    state.suppliers.append(supplier)
    state.persist("suppliers")
    return supplier


def delete_supplier(state: ClinicState, identity: Identity, supplier_id: str) -> Supplier:
    authorize(identity, Capability.MANAGE_INVENTORY)
    supplier = state.find_supplier(supplier_id)
    if supplier is None:
        raise ReferenceNotFoundError(GlobalMessages.SUPPLIER_NOT_FOUND)
    state.suppliers = [s for s in state.suppliers if s.id != supplier_id]
    state.persist("suppliers")
    return supplier


# ============================================================================
# SALES
# ============================================================================

def list_sales(state: ClinicState, identity: Identity) -> List[Sale]:
    authorize(identity, Capability.VIEW_INVENTORY)
    return list(state.sales)


def register_sale(state: ClinicState, identity: Identity, doctor_id: str, items: Sequence[CartItem]) -> Sale:
    """Sell supplies to a doctor and take them out of stock."""
    authorize(identity, Capability.REGISTER_SALE)
    if state.find_doctor(doctor_id) is None:
        raise ReferenceNotFoundError(GlobalMessages.DOCTOR_NOT_FOUND)
    if not items:
        raise ValidationError(GlobalMessages.EMPTY_CART)

    # Same product added twice counts as one cart line
    quantities = {}
    for item in items:
        if item.quantity <= 0:
            raise ValidationError("Quantities must be greater than zero.")
        quantities[item.product_id] = quantities.get(item.product_id, 0) + item.quantity

    sale_items: List[SaleItem] = []
    for product_id, quantity in quantities.items():
        product = state.find_product(product_id)
        if product is None:
            raise ReferenceNotFoundError(GlobalMessages.PRODUCT_NOT_FOUND)
        if quantity > product.stock:
            raise ValidationError(GlobalMessages.INSUFFICIENT_STOCK.format(product=product.name))
        sale_items.append(SaleItem(
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            price_at_sale=product.sell_price,
        ))

    sale = Sale(
        id=new_id(),
        doctor_id=doctor_id,
        date=state.clock(),
        items=sale_items,
        total=sum(i.price_at_sale * i.quantity for i in sale_items),
    )
    for item in sale_items:
        product = state.find_product(item.product_id)
        state.products[state.products.index(product)] = product.model_copy(
            update={"stock": product.stock - item.quantity}
        )
    state.sales.append(sale)
    state.persist("products", "sales")
    logger.info("Sale %s registered for doctor %s (%d lines)", sale.id, doctor_id, len(sale_items))
    return sale
