import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime, date
from database import get_db
from crud import reports
from schemas.reports import ReportSummary, MonthlyBreakdown, Debtor
from utils import report_export

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/summary", response_model=ReportSummary)
def get_summary(db: Session = Depends(get_db)):
    """
    Dashboard figures:
    - customer, inventory and low stock counts
    - total sales, payments and the debt derived from them
    - top debtors and the most recent sales
    """
    return reports.get_summary(db)

@router.get("/debtors", response_model=List[Debtor])
def get_debtors(limit: Optional[int] = Query(None, ge=1), db: Session = Depends(get_db)):
    return reports.get_debtors(db, limit)

@router.get("/monthly", response_model=List[MonthlyBreakdown])
def get_monthly_breakdown(
    start_date: Optional[date] = Query(None, description="First day to include"),
    end_date: Optional[date] = Query(None, description="Last day to include"),
    db: Session = Depends(get_db)
):
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=400, detail="start_date must not be after end_date")

    return reports.get_monthly_breakdown(
        db,
        datetime.combine(start_date, datetime.min.time()) if start_date else None,
        datetime.combine(end_date, datetime.max.time()) if end_date else None
    )

@router.get("/export/{report_type}")
def export_report(
    report_type: str,
    format: str = Query("pdf", pattern="^(pdf|excel)$"),
    db: Session = Depends(get_db)
):
    if report_type == "summary":
        data = reports.get_summary(db)
    elif report_type == "debtors":
        data = reports.get_debtors(db)
    else:
        raise HTTPException(status_code=400, detail="Invalid report type")

    filename = f"{report_type}-{date.today().isoformat()}"
    try:
        if format == "pdf":
            content = report_export.generate_pdf_report(report_type, data)
            filename = f"{filename}.pdf"
            media_type = "application/pdf"
        else:
            content = report_export.generate_excel_report(report_type, data)
            filename = f"{filename}.xlsx"
            media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    except Exception as e:
        logger.exception("failed to render %s report as %s", report_type, format)
        raise HTTPException(status_code=500, detail=f"Error generating report: {str(e)}")

    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )
