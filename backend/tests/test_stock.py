from decimal import Decimal
from types import SimpleNamespace

import pytest

from crud import app_config as crud_app_config
from crud.stock import get_low_stock_items, get_stock_movements, is_low_stock, recompute_stock, stock_delta
from exceptions import ConstraintViolation
from models.items import Item
from models.vouchers import Voucher, VoucherType
from schemas.app_config import AppConfigUpdate
from factories import USER, make_party, post_voucher
from models.parties import PartyRole


def test_stock_delta_per_voucher_type():
    assert stock_delta(VoucherType.PURCHASE, Decimal("5")) == Decimal("5")
    assert stock_delta(VoucherType.SALES, Decimal("5")) == Decimal("-5")
    assert stock_delta(VoucherType.RECEIPT, Decimal("5")) == 0
    assert stock_delta(VoucherType.PAYMENT, Decimal("5")) == 0


def test_low_stock_boundary_is_inclusive():
    assert is_low_stock(SimpleNamespace(current_stock=Decimal("20"), reorder_level=Decimal("20")))
    assert not is_low_stock(SimpleNamespace(current_stock=Decimal("20.001"), reorder_level=Decimal("20")))


def test_recompute_from_opening_stock():
    movements = [(VoucherType.PURCHASE, Decimal("30")), (VoucherType.SALES, Decimal("50"))]
    assert recompute_stock(Decimal("100"), movements) == Decimal("80")


def test_worked_example(db, company, item, customer):
    supplier = make_party(db, company.id, PartyRole.SUPPLIER, "Kumar Feeds")

    post_voucher(db, company.id, VoucherType.PURCHASE, supplier.id, lines=[(item.id, 30)])
    post_voucher(db, company.id, VoucherType.SALES, customer.id, lines=[(item.id, 50)])
    db.refresh(item)
    assert item.current_stock == Decimal("80")
    assert not is_low_stock(item)

    post_voucher(db, company.id, VoucherType.SALES, customer.id, lines=[(item.id, 65)])
    db.refresh(item)
    assert item.current_stock == Decimal("15")
    assert is_low_stock(item)
    assert [i.id for i in get_low_stock_items(db, company.id)] == [item.id]


def test_movements_record_each_posting(db, company, item, customer):
    voucher = post_voucher(db, company.id, VoucherType.SALES, customer.id, lines=[(item.id, 40)])

    movements = get_stock_movements(db, company.id, item.id)
    assert len(movements) == 1
    assert movements[0].voucher_id == voucher.id
    assert movements[0].change_type == "sales"
    assert movements[0].change_amount == Decimal("-40")
    assert movements[0].old_quantity == Decimal("100")
    assert movements[0].new_quantity == Decimal("60")
    assert movements[0].changed_by == USER["sub"]


def test_stock_can_go_negative_by_default(db, company, item, customer):
    post_voucher(db, company.id, VoucherType.SALES, customer.id, lines=[(item.id, 130)])
    db.refresh(item)
    assert item.current_stock == Decimal("-30")


def test_oversell_rolls_back_when_negative_stock_disallowed(db, company, customer):
    from factories import make_item

    rice = make_item(db, company.id, "Rice", opening_stock="10", rate="5")
    wheat = make_item(db, company.id, "Wheat", opening_stock="3", rate="5")
    crud_app_config.set_config(
        db, company.id, crud_app_config.ALLOW_NEGATIVE_STOCK, AppConfigUpdate(value="false"), USER["sub"]
    )

    with pytest.raises(ConstraintViolation):
        post_voucher(db, company.id, VoucherType.SALES, customer.id, lines=[(rice.id, 4), (wheat.id, 5)])

    # The first line had already been applied in the session, it must be gone too
    assert db.query(Item).filter(Item.id == rice.id).one().current_stock == Decimal("10")
    assert db.query(Item).filter(Item.id == wheat.id).one().current_stock == Decimal("3")
    assert db.query(Voucher).count() == 0
    assert get_stock_movements(db, company.id, rice.id) == []


def test_fractional_quantities_match_recomputed_stock(db, company, item, customer):
    from models.voucher_line_items import VoucherLineItem

    post_voucher(db, company.id, VoucherType.SALES, customer.id, lines=[(item.id, "0.125")])
    post_voucher(db, company.id, VoucherType.SALES, customer.id, lines=[(item.id, "0.125")])

    stored = (
        db.query(Voucher.voucher_type, VoucherLineItem.quantity)
        .join(VoucherLineItem, VoucherLineItem.voucher_id == Voucher.id)
        .filter(VoucherLineItem.item_id == item.id)
        .all()
    )
    db.refresh(item)
    assert item.current_stock == Decimal("99.75")
    assert item.current_stock == recompute_stock(item.opening_stock, [(t, q) for t, q in stored])
