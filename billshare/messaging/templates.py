from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from billshare.core.models import OrderSummary
from billshare.formatting.bill_formatter import format_bill_for_messaging

DOCUMENT_NOTICE = (
    "📄 PDF bill has been downloaded to your device. "
    "Please attach it to this WhatsApp chat."
)

_HEADER_TEMPLATE = """🍽️ *{restaurant_name}* - Bill Receipt

📋 *Order Details:*
Table: {table_number}
Order(s): {order_numbers}
Total Amount: ₹{total_amount}

💳 Payment Status: Completed ✅"""

_FOOTER_TEMPLATE = """Thank you for dining with us! 🙏

---
Generated on {generated_on}"""


def format_generated_timestamp(moment: datetime) -> str:
    """Render a timestamp in the en-IN locale layout, e.g. `18/10/2026, 2:05:09 pm`."""
    hour: int = moment.hour % 12 or 12
    meridiem: str = "am" if moment.hour < 12 else "pm"
    return f"{moment:%d/%m/%Y}, {hour}:{moment:%M:%S} {meridiem}"


def format_currency_amount(amount: Decimal | int | float) -> str:
    """Two-decimal amount with halves rounded up, e.g. `0.125` -> `0.13`."""
    rounded: Decimal = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{rounded:.2f}"


def _order_header(order: OrderSummary) -> str:
    return _HEADER_TEMPLATE.format(
        restaurant_name=order.restaurant_name,
        table_number=order.table_number,
        order_numbers=", ".join(order.order_numbers),
        total_amount=format_currency_amount(order.total_amount),
    )


def _footer(generated_at: datetime | None) -> str:
    moment: datetime = generated_at or datetime.now()
    return _FOOTER_TEMPLATE.format(generated_on=format_generated_timestamp(moment))


def build_order_message(
    order: OrderSummary, generated_at: datetime | None = None
) -> str:
    detailed_bill: str = format_bill_for_messaging(order.bill_content or "")
    return "\n\n".join(
        [
            _order_header(order),
            f"📄 *Detailed Bill:*\n{detailed_bill}",
            _footer(generated_at),
        ]
    )


def build_document_handoff_message(
    order: OrderSummary, generated_at: datetime | None = None
) -> str:
    return "\n\n".join([_order_header(order), DOCUMENT_NOTICE, _footer(generated_at)])
