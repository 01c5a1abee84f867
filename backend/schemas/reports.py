from pydantic import BaseModel
from datetime import date
from decimal import Decimal
from typing import List
import enum

class TimeFrame(str, enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

class VoucherTotals(BaseModel):
    sales: Decimal = Decimal(0)
    purchases: Decimal = Decimal(0)
    receipts: Decimal = Decimal(0)
    payments: Decimal = Decimal(0)

class ReportBucket(VoucherTotals):
    label: str

class VoucherReport(BaseModel):
    time_frame: TimeFrame
    start_date: date
    end_date: date
    buckets: List[ReportBucket]
    totals: VoucherTotals

class DashboardSummary(VoucherTotals):
    date: date
    low_stock_items: int
