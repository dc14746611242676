import logging
from datetime import datetime
from decimal import Decimal
from typing import Annotated

from wireup import Inject, service

from billshare.core.models import OrderSummary
from billshare.messaging.links import build_messaging_link, build_upi_payment_link
from billshare.messaging.qr import generate_qr_code_data_url
from billshare.messaging.templates import (
    build_document_handoff_message,
    build_order_message,
)

logger: logging.Logger = logging.getLogger(__name__)


@service
class MessagingService:
    def __init__(
        self,
        default_country_code: Annotated[str, Inject(param="DEFAULT_COUNTRY_CODE")],
        upi_id: Annotated[str | None, Inject(param="UPI_ID")] = None,
        upi_payee_name: Annotated[str | None, Inject(param="UPI_PAYEE_NAME")] = None,
    ) -> None:
        self._default_country_code: str = default_country_code
        self._upi_id: str | None = upi_id
        self._upi_payee_name: str | None = upi_payee_name

    def build_messaging_link(self, phone: str, text: str, use_web: bool = False) -> str:
        return build_messaging_link(
            phone, text, use_web, default_country_code=self._default_country_code
        )

    def build_order_message(
        self, order: OrderSummary, generated_at: datetime | None = None
    ) -> str:
        return build_order_message(order, generated_at)

    def build_document_handoff_message(
        self, order: OrderSummary, generated_at: datetime | None = None
    ) -> str:
        return build_document_handoff_message(order, generated_at)

    def share_order(
        self,
        phone: str,
        order: OrderSummary,
        use_web: bool = False,
        document_saved: bool = False,
    ) -> str:
        """Deep link carrying either the full text bill or the PDF hand-off notice."""
        message: str = (
            self.build_document_handoff_message(order)
            if document_saved
            else self.build_order_message(order)
        )
        link: str = self.build_messaging_link(phone, message, use_web)
        logger.info(
            f"Built {'web' if use_web else 'mobile'} share link for table {order.table_number}"
        )
        return link

    def build_payment_link(self, amount: Decimal, note: str) -> str:
        if not self._upi_id:
            raise ValueError("UPI_ID is not configured")
        return build_upi_payment_link(
            self._upi_id, amount, self._upi_payee_name or "", note
        )

    def build_payment_qr_code(self, amount: Decimal, note: str) -> str:
        return generate_qr_code_data_url(self.build_payment_link(amount, note))
