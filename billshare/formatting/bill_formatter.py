import logging

from billshare.formatting.composer import compose
from billshare.formatting.sanitizer import sanitize

logger: logging.Logger = logging.getLogger(__name__)


def format_bill_for_messaging(html: str) -> str:
    """Turn a rendered bill into decorated plain text for a messaging channel."""
    lines: list[str] = sanitize(html)
    formatted: str = compose(lines)
    logger.debug(
        f"Formatted bill: {len(lines)} source lines, {len(formatted)} chars of text"
    )
    return formatted
