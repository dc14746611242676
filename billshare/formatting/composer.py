"""
Re-layout of sanitized bill lines as emoji-annotated plain text for a
messaging channel that renders only `*bold*` markup.

Composition is a single forward pass over the lines. Each line is fed to
`apply_rules`, a pure function of the active section and the line that returns
the next section and the text to emit. Rules are tried in a fixed priority
order and the first one that matches wins; the last rule is a catch-all so
every line gets a rendering (or is dropped as noise).
"""

import re
from collections.abc import Callable, Sequence
from typing import NamedTuple

from billshare.core.models import Section

RULE_WIDTH = 30
DASH_RULE: str = "-" * RULE_WIDTH
EQUALS_RULE: str = "=" * RULE_WIDTH
INDENT = "   "

HEADER_LINE_LIMIT = 3
MIN_CONTENT_LENGTH = 3

_RESTAURANT = re.compile(r"Restaurant", re.IGNORECASE)
_BILL_RECEIPT = re.compile(r"BILL RECEIPT", re.IGNORECASE)
_TABLE_DATE_TIME = re.compile(r"\b(?:Table|Date|Time):", re.IGNORECASE)
_ORDERS_HEADER = re.compile(r"Order Numbers|Combined Bill", re.IGNORECASE)
_ORDER_ENTRY = re.compile(r"^#")
_ITEM = re.compile(r"ITEM", re.IGNORECASE)
_TOTAL = re.compile(r"TOTAL", re.IGNORECASE)
_MULTIPLICATION = re.compile(r"[×x]")
_QUANTITY = re.compile(r"(?<![A-Za-z])[×xX]\s*\d+|\b\d+\s*[×xX](?![A-Za-z])")
_CURRENCY_DELIMITER = re.compile(r"₹|\$|Rs\.")
_TOTALS = re.compile(r"Subtotal|Tax|TOTAL AMOUNT|Final|Grand Total", re.IGNORECASE)
_AMOUNT_DUE = re.compile(r"TOTAL AMOUNT|Final|Grand Total", re.IGNORECASE)
_PAYMENT = re.compile(r"Payment Details|Method:", re.IGNORECASE)
_PAYMENT_HEADER = re.compile(r"Payment Details", re.IGNORECASE)
_THANK_YOU = re.compile(r"THANK YOU", re.IGNORECASE)
# Case-sensitive and unanchored; Date:/Time: lines are normally taken by the
# table/date/time rule first.
_TIMESTAMP = re.compile(r"Generated on|Date:|Time:")
_RESTAURANT_ADDRESS = re.compile(r"Restaurant Address")
_CONTACT = re.compile(r"📞|@|www\.|\.com|Address", re.IGNORECASE)


class Step(NamedTuple):
    section: Section
    emitted: list[str]


Rule = Callable[[Section, str, int], Step | None]


def advance(current: Section, target: Section) -> Section:
    """Move forward to `target` unless a later section is already active."""
    return target if target.rank > current.rank else current


def store_header(section: Section, line: str, index: int) -> Step | None:
    if index < HEADER_LINE_LIMIT and _RESTAURANT.search(line):
        return Step(section, [f"🏪 *{line}*"])
    return None


def bill_receipt_header(section: Section, line: str, index: int) -> Step | None:
    if _BILL_RECEIPT.search(line):
        return Step(section, ["", "📋 *BILL RECEIPT*", EQUALS_RULE])
    return None


def table_date_time(section: Section, line: str, index: int) -> Step | None:
    if _TABLE_DATE_TIME.search(line):
        return Step(section, [f"📍 {line}"])
    return None


def orders_header(section: Section, line: str, index: int) -> Step | None:
    if _ORDERS_HEADER.search(line):
        return Step(advance(section, Section.ORDERS), ["", f"🎫 *{line}*"])
    return None


def order_entry(section: Section, line: str, index: int) -> Step | None:
    if section is Section.ORDERS and _ORDER_ENTRY.search(line):
        return Step(section, [f"{INDENT}{line}"])
    return None


def items_header(section: Section, line: str, index: int) -> Step | None:
    if _ITEM.search(line) and _TOTAL.search(line):
        return Step(
            advance(section, Section.ITEMS),
            ["", "🍽️ *ITEMS & TOTALS*", DASH_RULE],
        )
    return None


def format_item_line(line: str) -> str:
    parts: list[str] = _CURRENCY_DELIMITER.split(line)
    if len(parts) >= 2:
        return f"• {parts[0].strip()} - ₹{parts[-1].strip()}"
    return f"• {line}"


def item_line(section: Section, line: str, index: int) -> Step | None:
    if section is Section.ITEMS and _MULTIPLICATION.search(line):
        return Step(section, [format_item_line(line)])
    # Priced item lines seen before any header open the items section.
    if (
        section is Section.NONE
        and _QUANTITY.search(line)
        and _CURRENCY_DELIMITER.search(line)
    ):
        return Step(Section.ITEMS, [format_item_line(line)])
    return None


def totals_line(section: Section, line: str, index: int) -> Step | None:
    if not _TOTALS.search(line):
        return None
    next_section: Section = advance(section, Section.TOTALS)
    if _AMOUNT_DUE.search(line):
        return Step(next_section, [DASH_RULE, f"💰 *{line}*", EQUALS_RULE])
    return Step(next_section, [f"{INDENT}{line}"])


def payment_line(section: Section, line: str, index: int) -> Step | None:
    if not _PAYMENT.search(line):
        return None
    next_section: Section = advance(section, Section.PAYMENT)
    if _PAYMENT_HEADER.search(line):
        return Step(next_section, ["", "💳 *PAYMENT DETAILS*", DASH_RULE])
    return Step(next_section, [f"{INDENT}{line}"])


def thank_you(section: Section, line: str, index: int) -> Step | None:
    if _THANK_YOU.search(line):
        return Step(section, ["", "🙏 *THANK YOU!*", f"{INDENT}Please visit us again!"])
    return None


def timestamp_line(section: Section, line: str, index: int) -> Step | None:
    if _TIMESTAMP.search(line):
        return Step(section, ["", f"📅 {line}"])
    return None


def fallback(section: Section, line: str, index: int) -> Step:
    if (
        len(line) <= MIN_CONTENT_LENGTH
        or _RESTAURANT_ADDRESS.search(line)
        or not line.strip()
    ):
        return Step(section, [])
    if _CONTACT.search(line):
        return Step(section, [f"📍 {line}"])
    if section is not Section.NONE:
        return Step(section, [f"{INDENT}{line}"])
    return Step(section, [line])


RULES: tuple[Rule, ...] = (
    store_header,
    bill_receipt_header,
    table_date_time,
    orders_header,
    order_entry,
    items_header,
    item_line,
    totals_line,
    payment_line,
    thank_you,
    timestamp_line,
)


def apply_rules(section: Section, line: str, index: int) -> Step:
    for rule in RULES:
        step: Step | None = rule(section, line, index)
        if step is not None:
            return step
    return fallback(section, line, index)


def finalize(emitted: Sequence[str]) -> str:
    text: str = "\n".join(emitted)
    text = re.sub(r"\n{3,}", "\n\n", text)
    text = re.sub(r"^\n+|\n+$", "", text)
    return text.strip()


def compose(lines: Sequence[str]) -> str:
    section: Section = Section.NONE
    emitted: list[str] = []

    for index, raw_line in enumerate(lines):
        line: str = raw_line.strip()
        if not line:
            continue
        section, output = apply_rules(section, line, index)
        emitted.extend(output)

    return finalize(emitted)
