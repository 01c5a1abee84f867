from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from schemas.reports import TimeFrame, VoucherReport, DashboardSummary
from utils.tenancy import get_current_company
from utils.excel import excel_response
from crud import reports as crud_reports

router = APIRouter(
    prefix="/reports",
    tags=["reports"],
)

@router.get("/vouchers", response_model=VoucherReport)
def read_voucher_report(time_frame: TimeFrame = TimeFrame.MONTHLY, db: Session = Depends(get_db), company=Depends(get_current_company)):
    """Sales, purchases, receipts and payments totalled per day, week of month, month or year."""
    return crud_reports.get_voucher_report(db, company.id, time_frame)

@router.get("/vouchers/export")
def export_voucher_report(time_frame: TimeFrame = TimeFrame.MONTHLY, db: Session = Depends(get_db), company=Depends(get_current_company)):
    report = crud_reports.get_voucher_report(db, company.id, time_frame)
    rows = [{
        "Period": bucket.label,
        "Sales": float(bucket.sales),
        "Purchases": float(bucket.purchases),
        "Receipts": float(bucket.receipts),
        "Payments": float(bucket.payments),
    } for bucket in report.buckets]
    rows.append({
        "Period": "TOTAL",
        "Sales": float(report.totals.sales),
        "Purchases": float(report.totals.purchases),
        "Receipts": float(report.totals.receipts),
        "Payments": float(report.totals.payments),
    })
    return excel_response(rows, f"voucher_report_{time_frame.value}.xlsx", "Voucher Report")

@router.get("/dashboard", response_model=DashboardSummary)
def read_dashboard(db: Session = Depends(get_db), company=Depends(get_current_company)):
    return crud_reports.get_dashboard_summary(db, company.id)
