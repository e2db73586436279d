# Overview: Service-layer operations for reporting; pure aggregation over completed transactions.

from __future__ import annotations

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Iterable

from ..decorators import require_role
from ..models import PaymentMethod, Product, Transaction
from ..money import ZERO, money_str
from ..permissions import EXPORT_REPORTS, VIEW_CASHIER_PERFORMANCE, VIEW_REPORTS, has_role
from ..time_utils import end_of_day, iso_day, start_of_day, to_utc_z, utcnow

logger = logging.getLogger(__name__)


class ReportError(Exception):
    """Raised when report generation fails."""
    pass


def day_bounds(start_date: date, end_date: date) -> tuple[datetime, datetime]:
    """Expand calendar dates to [start 00:00:00, end 23:59:59.999999]."""
    if start_date > end_date:
        raise ReportError("Start date must not be after end date")
    return start_of_day(start_date), end_of_day(end_date)


def default_range(today: date) -> tuple[date, date]:
    """The reports screen opens on the current month to date."""
    return today.replace(day=1), today


def generate_report(
    transactions: Iterable[Transaction],
    start: datetime,
    end: datetime,
    top_n: int = 5,
) -> dict:
    """
    Summarize transactions whose timestamp falls in [start, end] (inclusive).

    Always a full recomputation; nothing is cached between calls. Payment
    method buckets are always present in fixed order. Daily and cashier
    rows follow first-seen order; top products are sorted by revenue with
    ties kept in first-seen order.
    """
    if start > end:
        raise ReportError("Start must not be after end")

    filtered = [t for t in transactions if start <= t.timestamp <= end]

    total_sales = sum((t.total for t in filtered), ZERO)
    transaction_count = len(filtered)
    average = total_sales / transaction_count if transaction_count else ZERO

    by_method = {method: {"count": 0, "total": ZERO} for method in PaymentMethod}
    by_day: dict[str, dict] = {}
    by_product: dict[str, dict] = {}
    by_cashier: dict[str, dict] = {}

    for t in filtered:
        bucket = by_method[t.payment_method]
        bucket["count"] += 1
        bucket["total"] += t.total

        day = by_day.setdefault(iso_day(t.timestamp), {"total": ZERO, "count": 0})
        day["total"] += t.total
        day["count"] += 1

        for item in t.items:
            row = by_product.setdefault(item.product_id, {"name": item.name, "quantity": 0, "revenue": ZERO})
            row["name"] = item.name
            row["quantity"] += item.quantity
            row["revenue"] += item.price * item.quantity

        cashier = by_cashier.setdefault(t.cashier_id, {"name": t.cashier_name, "count": 0, "total": ZERO})
        cashier["name"] = t.cashier_name
        cashier["count"] += 1
        cashier["total"] += t.total

    products = [
        {
            "product_id": product_id,
            "product_name": row["name"],
            "quantity_sold": row["quantity"],
            "total_revenue": row["revenue"],
        }
        for product_id, row in by_product.items()
    ]
    # sorted() is stable, so equal revenues keep first-seen order
    top_products = sorted(products, key=lambda r: r["total_revenue"], reverse=True)[:top_n]

    return {
        "start": start,
        "end": end,
        "total_sales": total_sales,
        "transaction_count": transaction_count,
        "average_transaction_value": average,
        "sales_by_payment_method": [
            {"method": method.value, "count": data["count"], "total": data["total"]}
            for method, data in by_method.items()
        ],
        "daily_sales": [
            {"date": day, "total": data["total"], "transaction_count": data["count"]}
            for day, data in by_day.items()
        ],
        "top_products": top_products,
        "cashier_performance": [
            {
                "cashier_id": cashier_id,
                "cashier_name": data["name"],
                "transaction_count": data["count"],
                "total_sales": data["total"],
            }
            for cashier_id, data in by_cashier.items()
        ],
    }


def report_to_dict(report: dict, include_cashier_performance: bool = True) -> dict:
    """JSON-safe copy of a report: money as strings, datetimes as ISO-8601."""
    data = {
        "report_period": f"{report['start'].date().isoformat()} - {report['end'].date().isoformat()}",
        "start": to_utc_z(report["start"]),
        "end": to_utc_z(report["end"]),
        "total_sales": money_str(report["total_sales"]),
        "transaction_count": report["transaction_count"],
        "average_transaction_value": money_str(report["average_transaction_value"]),
        "sales_by_payment_method": [
            {**row, "total": money_str(row["total"])} for row in report["sales_by_payment_method"]
        ],
        "daily_sales": [
            {**row, "total": money_str(row["total"])} for row in report["daily_sales"]
        ],
        "top_products": [
            {**row, "total_revenue": money_str(row["total_revenue"])} for row in report["top_products"]
        ],
    }
    if include_cashier_performance:
        data["cashier_performance"] = [
            {**row, "total_sales": money_str(row["total_sales"])} for row in report["cashier_performance"]
        ]
    return data


def report_filename(start: date, end: date) -> str:
    return f"boutique-report-{start.isoformat()}-to-{end.isoformat()}.json"


def export_report(report: dict, directory, include_cashier_performance: bool = True) -> Path:
    """
    Write the report as indented JSON and return the file path.

    The file is named after the report's calendar range; an existing file
    with the same name is replaced.
    """
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / report_filename(report["start"].date(), report["end"].date())
    payload = report_to_dict(report, include_cashier_performance=include_cashier_performance)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    logger.info("Report exported to %s", path)
    return path


def dashboard_summary(
    transactions: Iterable[Transaction],
    products: Iterable[Product],
    now: datetime,
    low_stock_threshold: int = 5,
    recent_limit: int = 5,
) -> dict:
    """
    Today's sales and transaction count plus catalog stock alerts.

    `recent_transactions` holds the first `recent_limit` entries of the log
    in log order.
    """
    transactions = list(transactions)
    today = start_of_day(now.date())
    todays = [t for t in transactions if t.timestamp >= today]
    products = list(products)
    return {
        "today_sales": sum((t.total for t in todays), ZERO),
        "today_transactions": len(todays),
        "low_stock_items": sum(1 for p in products if p.stock <= low_stock_threshold),
        "total_products": len(products),
        "recent_transactions": transactions[:recent_limit],
    }


class ReportService:
    """Role-gated entry points over the cart's transaction log."""

    def __init__(
        self,
        cart,
        session,
        *,
        top_n: int = 5,
        export_dir="exports",
        low_stock_threshold: int = 5,
        clock: Callable = utcnow,
    ):
        self.cart = cart
        self.session = session
        self.top_n = top_n
        self.export_dir = export_dir
        self.low_stock_threshold = low_stock_threshold
        self.clock = clock

    @property
    def can_access_reports(self) -> bool:
        return has_role(self.session.role, VIEW_REPORTS)

    @property
    def can_view_cashier_performance(self) -> bool:
        return has_role(self.session.role, VIEW_CASHIER_PERFORMANCE)

    def _resolve_range(self, start_date: date | None, end_date: date | None) -> tuple[date, date]:
        default_start, default_end = default_range(self.clock().date())
        if start_date is None:
            start_date = default_start
        if end_date is None:
            end_date = default_end
        return start_date, end_date

    @require_role(VIEW_REPORTS, "view reports")
    def sales_report(self, start_date: date | None = None, end_date: date | None = None) -> dict:
        """Report over whole calendar days; a missing bound defaults to this month to date."""
        start_date, end_date = self._resolve_range(start_date, end_date)
        start, end = day_bounds(start_date, end_date)
        report = generate_report(self.cart.transactions, start, end, top_n=self.top_n)
        if not self.can_view_cashier_performance:
            report["cashier_performance"] = []
        return report

    @require_role(EXPORT_REPORTS, "export reports")
    def export(self, start_date: date | None = None, end_date: date | None = None) -> Path:
        report = self.sales_report(start_date, end_date)
        return export_report(
            report,
            self.export_dir,
            include_cashier_performance=self.can_view_cashier_performance,
        )

    def dashboard(self, now: datetime) -> dict:
        return dashboard_summary(
            self.cart.transactions,
            self.cart.catalog.products,
            now,
            low_stock_threshold=self.low_stock_threshold,
        )
