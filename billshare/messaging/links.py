from decimal import Decimal
from urllib.parse import quote, urlencode

from billshare.messaging.phone import DEFAULT_COUNTRY_CODE, normalize_phone_number

WEB_SEND_URL = "https://web.whatsapp.com/send"
MOBILE_SEND_URL = "https://wa.me"
UPI_CURRENCY = "INR"

# Characters left unescaped by JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(text: str) -> str:
    return quote(text, safe=_URI_COMPONENT_SAFE)


def build_messaging_link(
    phone: str,
    text: str,
    use_web: bool = False,
    default_country_code: str = DEFAULT_COUNTRY_CODE,
) -> str:
    """
    Deep link that opens a chat with `phone` pre-filled with `text`.

    The web variant targets the browser client directly; the mobile variant
    opens the app (or falls back to the browser) on the user's device.
    """
    number: str = normalize_phone_number(phone, default_country_code)
    encoded_text: str = encode_uri_component(text)

    if use_web:
        return f"{WEB_SEND_URL}?phone={number}&text={encoded_text}"
    return f"{MOBILE_SEND_URL}/{number}?text={encoded_text}"


def format_upi_amount(amount: Decimal | float) -> str:
    return format(Decimal(str(amount)).normalize(), "f")


def build_upi_payment_link(
    upi_id: str, amount: Decimal | float, payee_name: str, note: str
) -> str:
    # upi://pay?pa=UPI_ID&pn=NAME&tn=NOTE&am=AMOUNT&cu=INR
    params: dict[str, str] = {
        "pa": upi_id,
        "pn": payee_name,
        "tn": note,
        "am": format_upi_amount(amount),
        "cu": UPI_CURRENCY,
    }
    return f"upi://pay?{urlencode(params)}"
