from datetime import date

import pytest

from crud.voucher_numbers import format_voucher_number, next_voucher_number, parse_voucher_number
from exceptions import ConstraintViolation
from models.parties import PartyRole
from models.vouchers import Voucher, VoucherType
from factories import post_voucher


def test_format_pads_to_four_digits():
    assert format_voucher_number(VoucherType.SALES, 1) == "SAL-0001"
    assert format_voucher_number(VoucherType.PURCHASE, 42) == "PUR-0042"
    assert format_voucher_number(VoucherType.RECEIPT, 9999) == "REC-9999"


def test_format_grows_past_four_digits():
    assert format_voucher_number(VoucherType.PAYMENT, 12345) == "PAY-12345"


def test_format_rejects_sequence_below_one():
    with pytest.raises(ValueError):
        format_voucher_number(VoucherType.SALES, 0)


def test_parse_returns_suffix():
    assert parse_voucher_number(VoucherType.SALES, "SAL-0007") == 7
    assert parse_voucher_number(VoucherType.PAYMENT, "PAY-10000") == 10000


@pytest.mark.parametrize("number", ["SAL-", "SAL-12a", "PUR-0001", "garbage", "", None])
def test_parse_rejects_malformed_numbers(number):
    with pytest.raises(ConstraintViolation):
        parse_voucher_number(VoucherType.SALES, number)


def test_first_number_for_company_and_type(db, company):
    assert next_voucher_number(db, company.id, VoucherType.SALES) == "SAL-0001"
    assert next_voucher_number(db, company.id, VoucherType.PAYMENT) == "PAY-0001"


def test_next_number_follows_last_voucher(db, company, customer):
    post_voucher(db, company.id, VoucherType.SALES, customer.id, amount=10)
    post_voucher(db, company.id, VoucherType.SALES, customer.id, amount=10)

    assert next_voucher_number(db, company.id, VoucherType.SALES) == "SAL-0003"
    # Other types keep their own sequence
    assert next_voucher_number(db, company.id, VoucherType.RECEIPT) == "REC-0001"


def test_sequences_are_per_company(db, company, customer):
    from crud import companies as crud_companies
    from schemas.companies import CompanyCreate
    from factories import make_party

    post_voucher(db, company.id, VoucherType.SALES, customer.id, amount=10)
    other = crud_companies.create_company(db, CompanyCreate(name="Other Co"), user_id="user-1")
    other_customer = make_party(db, other.id, PartyRole.CUSTOMER, "Ravi Stores")

    voucher = post_voucher(db, other.id, VoucherType.SALES, other_customer.id, amount=10)
    assert voucher.voucher_number == "SAL-0001"


def test_corrupt_last_number_is_raised(db, company, customer):
    db.add(Voucher(
        company_id=company.id,
        voucher_type=VoucherType.SALES,
        voucher_number="SALE/17",
        party_id=customer.id,
        date=date(2026, 10, 6),
        amount=5,
    ))
    db.commit()

    with pytest.raises(ConstraintViolation):
        next_voucher_number(db, company.id, VoucherType.SALES)


def test_next_after_stored_number(db, company, customer):
    db.add(Voucher(
        company_id=company.id,
        voucher_type=VoucherType.SALES,
        voucher_number="SAL-0007",
        party_id=customer.id,
        date=date(2026, 10, 6),
        amount=5,
    ))
    db.commit()

    assert next_voucher_number(db, company.id, VoucherType.SALES) == "SAL-0008"
    assert post_voucher(db, company.id, VoucherType.SALES, customer.id, amount=1).voucher_number == "SAL-0008"
