import base64
from decimal import Decimal
from urllib.parse import unquote

import pytest

from billshare.core.models import OrderSummary
from billshare.messaging.messaging_service import MessagingService
from billshare.messaging.qr import generate_qr_code_data_url

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def order() -> OrderSummary:
    return OrderSummary(
        restaurant_name="Spice Garden",
        table_number="7",
        order_numbers=["ORD-7"],
        total_amount=Decimal("180.5"),
        bill_content="<p>BILL RECEIPT</p><p>Table: 7</p>",
    )


class TestMessagingService:
    def test_uses_configured_country_code(self):
        service = MessagingService(default_country_code="1")

        url = service.build_messaging_link("415 555 2671", "hi")

        assert url == "https://wa.me/14155552671?text=hi"

    def test_share_order_with_text_bill(self, order):
        service = MessagingService(default_country_code="91")

        url = service.share_order("9876543210", order)

        text = unquote(url.split("?text=", 1)[1])
        assert url.startswith("https://wa.me/919876543210?text=")
        assert "📄 *Detailed Bill:*" in text
        assert "📍 Table: 7" in text

    def test_share_order_after_document_saved(self, order):
        service = MessagingService(default_country_code="91")

        url = service.share_order("9876543210", order, use_web=True, document_saved=True)

        text = unquote(url.split("&text=", 1)[1])
        assert url.startswith("https://web.whatsapp.com/send?phone=919876543210")
        assert "PDF bill has been downloaded" in text

    def test_payment_link_requires_upi_id(self):
        service = MessagingService(default_country_code="91")

        with pytest.raises(ValueError):
            service.build_payment_link(Decimal("10"), "Table 7")

    def test_payment_qr_code(self):
        service = MessagingService(
            default_country_code="91", upi_id="spice@upi", upi_payee_name="Spice Garden"
        )

        data_url = service.build_payment_qr_code(Decimal("180.50"), "Table 7")

        assert data_url.startswith("data:image/png;base64,")
        payload = base64.b64decode(data_url.split(",", 1)[1])
        assert payload.startswith(PNG_SIGNATURE)


class TestGenerateQrCodeDataUrl:
    def test_png_data_url(self):
        data_url = generate_qr_code_data_url("upi://pay?pa=spice@upi&am=10&cu=INR")

        payload = base64.b64decode(data_url.removeprefix("data:image/png;base64,"))
        assert payload.startswith(PNG_SIGNATURE)
