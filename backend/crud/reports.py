from sqlalchemy.orm import Session
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, List, Optional

from models.vouchers import Voucher, VoucherType
from models.items import Item
from schemas.reports import TimeFrame, ReportBucket, VoucherReport, VoucherTotals, DashboardSummary
from crud.stock import is_low_stock
from utils.timezone import today as business_today

# Report column for each voucher type
TOTAL_FIELDS = {
    VoucherType.SALES: "sales",
    VoucherType.PURCHASE: "purchases",
    VoucherType.RECEIPT: "receipts",
    VoucherType.PAYMENT: "payments",
}


def bucket_label(day: date, time_frame: TimeFrame) -> str:
    if time_frame == TimeFrame.DAILY:
        return f"{day:%b} {day.day}"
    if time_frame == TimeFrame.WEEKLY:
        # Week of the month: days 1-7 are week 1, 8-14 week 2, ...
        return f"Week {(day.day + 6) // 7}"
    if time_frame == TimeFrame.MONTHLY:
        return f"{day:%b %Y}"
    return str(day.year)


def _years_before(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # 29 February in a non-leap target year
        return day.replace(year=day.year - years, day=28)


def report_window_start(time_frame: TimeFrame, today: date) -> date:
    """First date included for a time frame: 30 days, 84 days, 12 months or 5 years back."""
    if time_frame == TimeFrame.DAILY:
        return today - timedelta(days=30)
    if time_frame == TimeFrame.WEEKLY:
        return today - timedelta(days=84)
    if time_frame == TimeFrame.MONTHLY:
        return _years_before(today, 1)
    return _years_before(today, 5)


def aggregate_vouchers(vouchers: Iterable, time_frame: TimeFrame) -> List[ReportBucket]:
    """
    Bucket vouchers by the label of their date and total them per voucher type.

    Buckets come out in order of first occurrence, so a date-ascending
    input yields chronologically ordered buckets.
    """
    buckets = {}
    for voucher in vouchers:
        label = bucket_label(voucher.date, time_frame)
        bucket = buckets.get(label)
        if bucket is None:
            bucket = buckets[label] = ReportBucket(label=label)
        field = TOTAL_FIELDS[voucher.voucher_type]
        setattr(bucket, field, getattr(bucket, field) + Decimal(voucher.amount))
    return list(buckets.values())


def summarize_totals(totals: Iterable[VoucherTotals]) -> VoucherTotals:
    summary = VoucherTotals()
    for row in totals:
        for field in TOTAL_FIELDS.values():
            setattr(summary, field, getattr(summary, field) + getattr(row, field))
    return summary


def get_voucher_report(db: Session, company_id: int, time_frame: TimeFrame, today: Optional[date] = None) -> VoucherReport:
    today = today or business_today()
    start_date = report_window_start(time_frame, today)
    vouchers = (
        db.query(Voucher)
        .filter(
            Voucher.company_id == company_id,
            Voucher.date >= start_date,
        )
        .order_by(Voucher.date.asc(), Voucher.id.asc())
        .all()
    )
    # Post-dated vouchers are reported too, the window is open-ended
    end_date = max(today, vouchers[-1].date) if vouchers else today
    buckets = aggregate_vouchers(vouchers, time_frame)
    return VoucherReport(
        time_frame=time_frame,
        start_date=start_date,
        end_date=end_date,
        buckets=buckets,
        totals=summarize_totals(buckets),
    )


def get_dashboard_summary(db: Session, company_id: int, today: Optional[date] = None) -> DashboardSummary:
    """Today's totals per voucher type and the number of items at or below their reorder level."""
    today = today or business_today()
    vouchers = (
        db.query(Voucher)
        .filter(Voucher.company_id == company_id, Voucher.date == today)
        .order_by(Voucher.id.asc())
        .all()
    )
    totals = VoucherTotals()
    for voucher in vouchers:
        field = TOTAL_FIELDS[voucher.voucher_type]
        setattr(totals, field, getattr(totals, field) + Decimal(voucher.amount))

    items = db.query(Item).filter(Item.company_id == company_id).all()
    low_stock_items = sum(1 for item in items if is_low_stock(item))

    return DashboardSummary(date=today, low_stock_items=low_stock_items, **totals.model_dump())
