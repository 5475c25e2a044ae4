from datetime import datetime, timezone
from decimal import Decimal
from io import BytesIO

import openpyxl
import pytest

from crud import ledger, reports
from models import Customer, Payment, Transaction
from schemas.ledger import PaymentCreate, TransactionCreate


@pytest.fixture
def ledger_rows(db, customer, item):
    other = Customer(name="Baraka Otieno", slug="baraka-otieno")
    db.add(other)
    db.commit()

    ledger.record_sale(db, customer.id, TransactionCreate(item_id=item.id, quantity=3))
    ledger.record_sale(db, other.id, TransactionCreate(item_id=item.id, quantity=1))
    ledger.record_payment(db, customer.id, PaymentCreate(amount=Decimal("5")))
    ledger.record_payment(db, other.id, PaymentCreate(amount=Decimal("12")))
    return customer, other


def test_summary_totals(db, ledger_rows):
    summary = reports.get_summary(db)

    assert summary["total_customers"] == 2
    assert summary["total_inventory"] == 1
    assert summary["low_stock_items"] == 1
    assert summary["total_transactions"] == Decimal("40.00")
    assert summary["total_payments"] == Decimal("17.00")
    assert summary["total_debt"] == Decimal("23.00")


def test_top_debtors_skip_paid_up_customers(db, ledger_rows):
    customer, _ = ledger_rows
    debtors = reports.get_debtors(db)
    assert debtors == [{"id": customer.id, "name": "Amina Yusuf", "debt": Decimal("25.00")}]


def test_recent_transactions_newest_first(db, ledger_rows):
    recent = reports.get_recent_transactions(db, 5)
    assert [t["customer_name"] for t in recent] == ["Baraka Otieno", "Amina Yusuf"]
    assert recent[0]["item_name"] == "Rice 5kg"


def test_summary_endpoint(client, ledger_rows):
    body = client.get("/api/v1/reports/summary").json()
    assert Decimal(body["total_debt"]) == Decimal("23.00")
    assert len(body["top_debtors"]) == 1
    assert len(body["recent_transactions"]) == 2


def test_monthly_breakdown(db, customer, item):
    db.add_all([
        Transaction(customer_id=customer.id, item_id=item.id, quantity=1, price=Decimal("10"), total=Decimal("10"),
                    created_at=datetime(2026, 1, 15, tzinfo=timezone.utc)),
        Transaction(customer_id=customer.id, item_id=item.id, quantity=2, price=Decimal("10"), total=Decimal("20"),
                    created_at=datetime(2026, 3, 2, tzinfo=timezone.utc)),
        Payment(customer_id=customer.id, amount=Decimal("7.50"), created_at=datetime(2026, 3, 20, tzinfo=timezone.utc)),
    ])
    db.commit()

    months = reports.get_monthly_breakdown(db)
    assert months == [
        {"month": "Jan 2026", "sales": Decimal("10.00"), "payments": Decimal("0"), "net": Decimal("10.00")},
        {"month": "Mar 2026", "sales": Decimal("20.00"), "payments": Decimal("7.50"), "net": Decimal("12.50")},
    ]

    march_only = reports.get_monthly_breakdown(db, start_date=datetime(2026, 3, 1))
    assert [m["month"] for m in march_only] == ["Mar 2026"]

    through_february = reports.get_monthly_breakdown(db, end_date=datetime(2026, 2, 28))
    assert [m["month"] for m in through_february] == ["Jan 2026"]


def test_monthly_endpoint_end_date_includes_the_whole_day(client, db, customer, item):
    db.add_all([
        Transaction(customer_id=customer.id, item_id=item.id, quantity=1, price=Decimal("10"), total=Decimal("10"),
                    created_at=datetime(2026, 4, 30, 18, 45)),
        Transaction(customer_id=customer.id, item_id=item.id, quantity=1, price=Decimal("10"), total=Decimal("10"),
                    created_at=datetime(2026, 5, 1, 9, 0)),
    ])
    db.commit()

    body = client.get("/api/v1/reports/monthly", params={"end_date": "2026-04-30"}).json()
    assert [m["month"] for m in body] == ["Apr 2026"]
    assert Decimal(body[0]["sales"]) == Decimal("10")
    assert Decimal(body[0]["net"]) == Decimal("10")


def test_monthly_breakdown_empty(db):
    assert reports.get_monthly_breakdown(db) == []


def test_monthly_endpoint_rejects_reversed_range(client):
    response = client.get("/api/v1/reports/monthly", params={"start_date": "2026-05-01", "end_date": "2026-04-01"})
    assert response.status_code == 400


@pytest.mark.parametrize("report_type", ["summary", "debtors"])
def test_pdf_export(client, ledger_rows, report_type):
    response = client.get(f"/api/v1/reports/export/{report_type}", params={"format": "pdf"})
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")


@pytest.mark.parametrize("report_type", ["summary", "debtors"])
def test_excel_export(client, ledger_rows, report_type):
    response = client.get(f"/api/v1/reports/export/{report_type}", params={"format": "excel"})
    assert response.status_code == 200
    assert response.headers["content-disposition"].endswith(".xlsx")
    # xlsx files are zip archives
    assert response.content[:2] == b"PK"


def test_export_unknown_report(client):
    assert client.get("/api/v1/reports/export/balance-sheet").status_code == 400


def test_excel_export_writes_names_as_text_and_money_as_numbers(client, db, item):
    hostile = Customer(name='=HYPERLINK("http://x","c")', slug="hyperlink")
    db.add(hostile)
    db.commit()
    ledger.record_sale(db, hostile.id, TransactionCreate(item_id=item.id, quantity=1))

    response = client.get("/api/v1/reports/export/debtors", params={"format": "excel"})
    assert response.status_code == 200

    sheet = openpyxl.load_workbook(BytesIO(response.content)).active
    name_cell, debt_cell = sheet["A5"], sheet["B5"]
    assert name_cell.data_type == "s"
    assert name_cell.value == '=HYPERLINK("http://x","c")'
    assert debt_cell.data_type == "n"
    assert debt_cell.value == 10
    assert sheet["B6"].value == 10


def test_excel_summary_metrics_are_numbers(client, ledger_rows):
    response = client.get("/api/v1/reports/export/summary", params={"format": "excel"})
    sheet = openpyxl.load_workbook(BytesIO(response.content)).active

    metrics = {sheet.cell(row=r, column=1).value: sheet.cell(row=r, column=2).value for r in range(5, 11)}
    assert metrics["Customers"] == 2
    assert metrics["Total sales"] == 40
    assert metrics["Outstanding debt"] == 23
