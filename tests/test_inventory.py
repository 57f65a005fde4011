"""
Tests for inventory and supply sales.

Sales snapshot prices, aggregate repeated cart lines and take the sold
quantity out of stock in the same step.
"""
import pytest

from medcon.common.errors import AuthorizationError, ReferenceNotFoundError, ValidationError
from medcon.modules.inventory import inventory_service as service
from medcon.modules.inventory.schemas import CartItem, ProductRequest, SupplierRequest


class TestRegisterSale:
    def test_sale_decrements_stock_and_snapshots_price(self, state, store, assistant, doctor, gloves, clock):
        sale = service.register_sale(state, assistant, doctor.id, [CartItem(product_id=gloves.id, quantity=3)])

        assert sale.total == pytest.approx(30.0)
        assert sale.date == clock.now
        assert sale.items[0].price_at_sale == 10.0
        assert sale.items[0].product_name == "Guantes"
        assert state.find_product(gloves.id).stock == 7
        assert store.load("mediflow_products")[0]["stock"] == 7
        assert store.load("mediflow_sales")[0]["id"] == sale.id

    def test_repeated_lines_are_merged(self, state, assistant, doctor, gloves):
        sale = service.register_sale(state, assistant, doctor.id, [
            CartItem(product_id=gloves.id, quantity=2),
            CartItem(product_id=gloves.id, quantity=3),
        ])

        assert len(sale.items) == 1
        assert sale.items[0].quantity == 5
        assert state.find_product(gloves.id).stock == 5

    def test_insufficient_stock_changes_nothing(self, state, assistant, doctor, gloves):
        with pytest.raises(ValidationError):
            service.register_sale(state, assistant, doctor.id, [CartItem(product_id=gloves.id, quantity=11)])

        assert state.find_product(gloves.id).stock == 10
        assert state.sales == []

    def test_empty_cart(self, state, assistant, doctor):
        with pytest.raises(ValidationError):
            service.register_sale(state, assistant, doctor.id, [])

    def test_unknown_doctor(self, state, assistant, gloves):
        with pytest.raises(ReferenceNotFoundError):
            service.register_sale(state, assistant, "nobody", [CartItem(product_id=gloves.id)])

    def test_unknown_product(self, state, assistant, doctor):
        with pytest.raises(ReferenceNotFoundError):
            service.register_sale(state, assistant, doctor.id, [CartItem(product_id="nope")])

    def test_price_change_does_not_touch_past_sales(self, state, admin, assistant, doctor, gloves, supplier):
        sale = service.register_sale(state, assistant, doctor.id, [CartItem(product_id=gloves.id, quantity=1)])
        service.update_product(state, admin, gloves.id, ProductRequest(
            name="Guantes", cost_price=6, sell_price=14, stock=9, supplier_id=supplier.id,
        ))

        assert state.sales[0].items[0].price_at_sale == 10.0
        assert state.sales[0].total == sale.total

    def test_doctor_cannot_register_sales(self, state, doctor_identity, doctor, gloves):
        with pytest.raises(AuthorizationError):
            service.register_sale(state, doctor_identity, doctor.id, [CartItem(product_id=gloves.id)])


class TestProducts:
    def test_low_stock(self, state, assistant, gloves, admin):
        service.update_product(state, admin, gloves.id, ProductRequest(name="Guantes", stock=5, min_stock=5))
        assert [p.id for p in service.low_stock(state, assistant)] == [gloves.id]

    def test_inventory_value_is_admin_only(self, state, admin, assistant, gloves):
        assert service.inventory_value(state, admin) == pytest.approx(60.0)
        with pytest.raises(AuthorizationError):
            service.inventory_value(state, assistant)

    def test_product_needs_known_supplier(self, state, admin):
        with pytest.raises(ReferenceNotFoundError):
            service.create_product(state, admin, ProductRequest(name="Gel", supplier_id="nope"))

    def test_create_and_delete(self, state, admin):
        product = service.create_product(state, admin, ProductRequest(name="  Gel  ", sell_price=6, stock=8))

        assert product.name == "Gel"
        service.delete_product(state, admin, product.id)
        assert state.products == []

    def test_assistant_cannot_create_products(self, state, assistant):
        with pytest.raises(AuthorizationError):
            service.create_product(state, assistant, ProductRequest(name="Gel"))


class TestSuppliers:
    def test_create_list_delete(self, state, admin, assistant):
        supplier = service.create_supplier(state, admin, SupplierRequest(name="Insumos del Centro"))

        assert service.list_suppliers(state, assistant) == [supplier]
        service.delete_supplier(state, admin, supplier.id)
        assert state.suppliers == []

    def test_delete_unknown(self, state, admin):
        with pytest.raises(ReferenceNotFoundError):
            service.delete_supplier(state, admin, "nope")
