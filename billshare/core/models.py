import base64
import io
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field


class Section(str, Enum):
    """Bill region a line belongs to, in the order they appear on a bill."""

    NONE = "none"
    ORDERS = "orders"
    ITEMS = "items"
    TOTALS = "totals"
    PAYMENT = "payment"

    @property
    def rank(self) -> int:
        return list(Section).index(self)


class OrderSummary(BaseModel):
    restaurant_name: str
    table_number: str
    order_numbers: list[str] = Field(default_factory=list)
    total_amount: Decimal
    # Rendered bill HTML; absent for the document hand-off message.
    bill_content: str | None = None

    model_config = ConfigDict(frozen=True)


class PageSize(BaseModel):
    width_mm: float = 210.0
    height_mm: float = 295.0

    model_config = ConfigDict(frozen=True)


class PageSlice(BaseModel):
    """One page-sized window into a full-height raster, in millimetres."""

    index: int
    # Vertical placement of the raster's top edge on the page (<= 0).
    offset_mm: float
    content_top_mm: float
    content_height_mm: float
    padding_mm: float

    model_config = ConfigDict(frozen=True)


@dataclass
class Raster:
    """A rendered bill image."""

    image: Image.Image

    @property
    def width_px(self) -> int:
        return self.image.width

    @property
    def height_px(self) -> int:
        return self.image.height

    def to_png_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.image.save(buffer, format="PNG")
        return buffer.getvalue()

    def to_data_url(self) -> str:
        encoded: str = base64.b64encode(self.to_png_bytes()).decode("ascii")
        return f"data:image/png;base64,{encoded}"
