from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from crud.reports import (
    aggregate_vouchers,
    bucket_label,
    get_dashboard_summary,
    get_voucher_report,
    report_window_start,
)
from models.parties import PartyRole
from models.vouchers import VoucherType
from schemas.reports import TimeFrame
from factories import make_item, make_party, post_voucher


def voucher(voucher_type, amount, on):
    return SimpleNamespace(voucher_type=voucher_type, amount=Decimal(str(amount)), date=on)


def test_bucket_labels():
    day = date(2026, 10, 6)
    assert bucket_label(day, TimeFrame.DAILY) == "Oct 6"
    assert bucket_label(day, TimeFrame.WEEKLY) == "Week 1"
    assert bucket_label(date(2026, 10, 8), TimeFrame.WEEKLY) == "Week 2"
    assert bucket_label(date(2026, 10, 29), TimeFrame.WEEKLY) == "Week 5"
    assert bucket_label(day, TimeFrame.MONTHLY) == "Oct 2026"
    assert bucket_label(day, TimeFrame.YEARLY) == "2026"


def test_report_windows():
    today = date(2026, 10, 16)
    assert report_window_start(TimeFrame.DAILY, today) == date(2026, 9, 16)
    assert report_window_start(TimeFrame.WEEKLY, today) == date(2026, 7, 24)
    assert report_window_start(TimeFrame.MONTHLY, today) == date(2025, 10, 16)
    assert report_window_start(TimeFrame.YEARLY, today) == date(2021, 10, 16)
    assert report_window_start(TimeFrame.MONTHLY, date(2028, 2, 29)) == date(2027, 2, 28)


def test_daily_aggregation_worked_example():
    day = date(2026, 10, 6)
    vouchers = [
        voucher(VoucherType.SALES, 40, day),
        voucher(VoucherType.SALES, 60, day),
        voucher(VoucherType.PURCHASE, 25, day),
    ]
    buckets = aggregate_vouchers(vouchers, TimeFrame.DAILY)

    assert len(buckets) == 1
    assert buckets[0].label == "Oct 6"
    assert buckets[0].sales == Decimal("100")
    assert buckets[0].purchases == Decimal("25")
    assert buckets[0].receipts == Decimal("0")
    assert buckets[0].payments == Decimal("0")


def test_monthly_aggregation_worked_example():
    vouchers = [
        voucher(VoucherType.SALES, 40, date(2026, 10, 2)),
        voucher(VoucherType.SALES, 60, date(2026, 10, 14)),
        voucher(VoucherType.PURCHASE, 25, date(2026, 10, 30)),
    ]
    [bucket] = aggregate_vouchers(vouchers, TimeFrame.MONTHLY)
    assert bucket.label == "Oct 2026"
    assert (bucket.sales, bucket.purchases, bucket.receipts, bucket.payments) == (
        Decimal("100"), Decimal("25"), Decimal("0"), Decimal("0"),
    )


def test_buckets_follow_first_occurrence():
    vouchers = [
        voucher(VoucherType.RECEIPT, 5, date(2026, 9, 30)),
        voucher(VoucherType.PAYMENT, 7, date(2026, 10, 1)),
        voucher(VoucherType.SALES, 3, date(2026, 9, 12)),
    ]
    buckets = aggregate_vouchers(vouchers, TimeFrame.MONTHLY)
    assert [b.label for b in buckets] == ["Sep 2026", "Oct 2026"]
    assert buckets[0].receipts == Decimal("5")
    assert buckets[0].sales == Decimal("3")
    assert buckets[1].payments == Decimal("7")


def test_same_week_of_month_merges_across_months():
    vouchers = [voucher(VoucherType.SALES, 1, date(2026, 9, 2)), voucher(VoucherType.SALES, 2, date(2026, 10, 3))]
    buckets = aggregate_vouchers(vouchers, TimeFrame.WEEKLY)
    assert [(b.label, b.sales) for b in buckets] == [("Week 1", Decimal("3"))]


def test_voucher_report_from_database(db, company, customer, supplier):
    today = date(2026, 10, 16)
    post_voucher(db, company.id, VoucherType.SALES, customer.id, amount=40, on=date(2026, 10, 6))
    post_voucher(db, company.id, VoucherType.SALES, customer.id, amount=60, on=date(2026, 10, 6))
    post_voucher(db, company.id, VoucherType.PURCHASE, supplier.id, amount=25, on=date(2026, 10, 6))
    # Outside the 30 day window
    post_voucher(db, company.id, VoucherType.SALES, customer.id, amount=999, on=date(2026, 8, 1))

    report = get_voucher_report(db, company.id, TimeFrame.DAILY, today=today)

    assert report.start_date == date(2026, 9, 16)
    assert report.end_date == today
    assert [b.label for b in report.buckets] == ["Oct 6"]
    assert report.totals.sales == Decimal("100")
    assert report.totals.purchases == Decimal("25")


def test_dashboard_summary(db, company, customer):
    supplier = make_party(db, company.id, PartyRole.SUPPLIER, "Kumar Feeds", "500")
    make_item(db, company.id, "Salt", opening_stock="5", reorder_level="10")
    make_item(db, company.id, "Sugar", opening_stock="50", reorder_level="10")
    today = date(2026, 10, 16)
    post_voucher(db, company.id, VoucherType.SALES, customer.id, amount=70, on=today)
    post_voucher(db, company.id, VoucherType.PAYMENT, supplier.id, amount=20, on=today)
    post_voucher(db, company.id, VoucherType.RECEIPT, customer.id, amount=15, on=date(2026, 10, 15))

    summary = get_dashboard_summary(db, company.id, today=today)

    assert summary.date == today
    assert summary.sales == Decimal("70")
    assert summary.payments == Decimal("20")
    assert summary.receipts == Decimal("0")
    assert summary.low_stock_items == 1


def test_post_dated_vouchers_are_reported(db, company, customer):
    today = date(2026, 10, 16)
    post_voucher(db, company.id, VoucherType.SALES, customer.id, amount=40, on=today)
    post_voucher(db, company.id, VoucherType.SALES, customer.id, amount=15, on=date(2026, 10, 19))

    report = get_voucher_report(db, company.id, TimeFrame.DAILY, today=today)

    assert report.end_date == date(2026, 10, 19)
    assert [b.label for b in report.buckets] == ["Oct 16", "Oct 19"]
    assert report.totals.sales == Decimal("55")
