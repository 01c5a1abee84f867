import random
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from crud.ledgers import (
    BALANCE_EFFECTS,
    LedgerSide,
    balance_effect,
    get_party_ledger,
    party_balance,
    project_ledger,
    sort_vouchers,
)
from exceptions import NotFound
from models.parties import PartyRole
from models.vouchers import VoucherType
from factories import post_voucher


def voucher(id, voucher_type, amount, on=date(2026, 10, 6)):
    return SimpleNamespace(
        id=id,
        date=on,
        voucher_type=voucher_type,
        voucher_number=f"V-{id}",
        amount=Decimal(str(amount)),
        narration=None,
    )


def test_customer_worked_example():
    vouchers = [
        voucher(1, VoucherType.SALES, 50, date(2026, 10, 1)),
        voucher(2, VoucherType.RECEIPT, 30, date(2026, 10, 2)),
    ]
    projection = project_ledger(PartyRole.CUSTOMER, Decimal("100"), vouchers)

    assert [e.balance for e in projection.entries] == [Decimal("150"), Decimal("120")]
    assert projection.entries[0].debit == Decimal("50")
    assert projection.entries[0].credit == Decimal("0")
    assert projection.entries[1].credit == Decimal("30")
    assert projection.entries[1].opening == Decimal("150")
    assert projection.closing_balance == Decimal("120")
    assert projection.inconsistencies == []


def test_supplier_worked_example():
    vouchers = [
        voucher(1, VoucherType.PURCHASE, 80),
        voucher(2, VoucherType.PAYMENT, 120),
    ]
    projection = project_ledger(PartyRole.SUPPLIER, Decimal("200"), vouchers)

    assert projection.entries[0].credit == Decimal("80")
    assert projection.entries[1].debit == Decimal("120")
    assert projection.closing_balance == Decimal("160")


def test_empty_ledger_closes_at_opening_balance():
    projection = project_ledger(PartyRole.CUSTOMER, Decimal("75"), [])
    assert projection.entries == []
    assert projection.closing_balance == Decimal("75")


@pytest.mark.parametrize("role", list(PartyRole))
@pytest.mark.parametrize("voucher_type", list(VoucherType))
def test_direction_table(role, voucher_type):
    expected = {
        (PartyRole.CUSTOMER, VoucherType.SALES): (LedgerSide.DEBIT, 1),
        (PartyRole.CUSTOMER, VoucherType.RECEIPT): (LedgerSide.CREDIT, -1),
        (PartyRole.SUPPLIER, VoucherType.PURCHASE): (LedgerSide.CREDIT, 1),
        (PartyRole.SUPPLIER, VoucherType.PAYMENT): (LedgerSide.DEBIT, -1),
    }
    assert balance_effect(role, voucher_type) == expected.get((role, voucher_type))

    projection = project_ledger(role, Decimal("10"), [voucher(1, voucher_type, 4)])
    if (role, voucher_type) in expected:
        side, sign = expected[(role, voucher_type)]
        entry = projection.entries[0]
        assert (entry.debit if side is LedgerSide.DEBIT else entry.credit) == Decimal("4")
        assert projection.closing_balance == Decimal("10") + sign * Decimal("4")
        assert projection.inconsistencies == []
    else:
        assert projection.entries == []
        assert projection.closing_balance == Decimal("10")
        assert projection.inconsistencies[0].voucher_id == 1


def test_direction_table_covers_exactly_the_matching_pairs():
    assert len(BALANCE_EFFECTS) == 4


def test_replay_order_is_date_then_creation():
    vouchers = [
        voucher(3, VoucherType.SALES, 10, date(2026, 10, 2)),
        voucher(1, VoucherType.RECEIPT, 5, date(2026, 10, 2)),
        voucher(2, VoucherType.SALES, 7, date(2026, 10, 1)),
    ]
    assert [v.id for v in sort_vouchers(vouchers)] == [2, 1, 3]


def test_projection_is_deterministic_for_any_input_order():
    vouchers = [
        voucher(i, VoucherType.SALES if i % 3 else VoucherType.RECEIPT, i * 3, date(2026, 9, 1 + i % 5))
        for i in range(1, 16)
    ]
    expected = project_ledger(PartyRole.CUSTOMER, Decimal("20"), sort_vouchers(vouchers))

    shuffled = list(vouchers)
    for seed in range(5):
        random.Random(seed).shuffle(shuffled)
        assert project_ledger(PartyRole.CUSTOMER, Decimal("20"), sort_vouchers(shuffled)) == expected


def test_party_balance_matches_projection():
    vouchers = [voucher(1, VoucherType.SALES, 50), voucher(2, VoucherType.RECEIPT, 30)]
    assert party_balance(PartyRole.CUSTOMER, Decimal("100"), vouchers) == Decimal("120")


def test_party_ledger_from_database(db, company, customer):
    post_voucher(db, company.id, VoucherType.RECEIPT, customer.id, amount=30, on=date(2026, 10, 2))
    post_voucher(db, company.id, VoucherType.SALES, customer.id, amount=50, on=date(2026, 10, 1))

    ledger = get_party_ledger(db, company.id, customer.id)

    assert ledger.title == "Ledger for Ravi Stores"
    assert ledger.opening_balance == Decimal("100")
    assert [e.voucher_number for e in ledger.entries] == ["SAL-0001", "REC-0001"]
    assert [e.balance for e in ledger.entries] == [Decimal("150"), Decimal("120")]
    assert ledger.closing_balance == Decimal("120")


def test_party_ledger_unknown_party(db, company):
    with pytest.raises(NotFound):
        get_party_ledger(db, company.id, 999)
