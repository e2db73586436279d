# Overview: Plain-text receipts for completed transactions; printing is a logging stub.

from __future__ import annotations

import logging

from ..models import PaymentMethod, StoreSettings, Transaction
from ..money import ZERO, money_str

logger = logging.getLogger(__name__)

RECEIPT_WIDTH = 40

PAYMENT_LABELS = {
    PaymentMethod.CASH: "Cash",
    PaymentMethod.CARD: "Card",
    PaymentMethod.MOBILE: "Mobile",
    PaymentMethod.PETTY_CASH: "Petty Cash",
}


def _row(left: str, right: str) -> str:
    space = max(1, RECEIPT_WIDTH - len(left) - len(right))
    return f"{left}{' ' * space}{right}"


def render_receipt(transaction: Transaction, settings: StoreSettings | None = None) -> str:
    settings = settings or StoreSettings()
    rule = "-" * RECEIPT_WIDTH

    lines = []
    if settings.receipt_show_logo:
        lines.append(f"*** {settings.store_name} ***".center(RECEIPT_WIDTH))
    else:
        lines.append(settings.store_name.center(RECEIPT_WIDTH))
    lines.append(settings.store_address.center(RECEIPT_WIDTH))
    lines.append(settings.store_phone.center(RECEIPT_WIDTH))
    lines.append(rule)
    lines.append(f"Receipt: {transaction.id}")
    lines.append(f"Date: {transaction.timestamp.strftime('%Y-%m-%d %H:%M')}")
    lines.append(f"Cashier: {transaction.cashier_name}")
    lines.append(rule)

    for item in transaction.items:
        lines.append(item.name)
        lines.append(_row(f"  {item.quantity} x {money_str(item.price)}", money_str(item.line_total)))

    lines.append(rule)
    if settings.receipt_show_tax_details:
        lines.append(_row("Subtotal", money_str(transaction.total)))
        lines.append(_row("Tax (0%)", money_str(ZERO)))
    lines.append(_row("TOTAL", money_str(transaction.total)))
    lines.append(_row("Payment", PAYMENT_LABELS[transaction.payment_method]))

    if transaction.amount_received is not None:
        lines.append(_row("Received", money_str(transaction.amount_received)))
        lines.append(_row("Change", money_str(transaction.change)))

    lines.append(rule)
    if settings.receipt_footer_text:
        lines.append(settings.receipt_footer_text.center(RECEIPT_WIDTH))
    return "\n".join(lines)


def print_receipt(transaction: Transaction, settings: StoreSettings | None = None) -> str:
    """No printer integration: logs the receipt and returns its text."""
    text = render_receipt(transaction, settings)
    logger.info("Printing receipt %s\n%s", transaction.id, text)
    return text
