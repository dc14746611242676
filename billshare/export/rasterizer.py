import asyncio
import logging
import shutil
import tempfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Annotated, Any, Protocol

from typing_extensions import override

import pymupdf
from PIL import Image, ImageChops
from wireup import Inject, abstract, service

from billshare.core.models import Raster

logger: logging.Logger = logging.getLogger(__name__)

# CSS pixels are 1/96 inch, PDF points 1/72 inch.
PX_PER_PT: float = 96 / 72

HOST_DOCUMENT_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <style>
    html, body {{ margin: 0; padding: 0; background: #ffffff; }}
    .bill-host {{ box-sizing: border-box; width: {width}px; padding: {padding}px; background: #ffffff; }}
  </style>
</head>
<body>
<div class="bill-host">
{content}
</div>
</body>
</html>
"""


@abstract
class IRasterizer(Protocol):
    async def rasterize(self, html: str) -> Raster:
        """Render bill HTML into a single full-height raster image."""
        ...


@asynccontextmanager
async def staging_host(document: str) -> AsyncIterator[Path]:
    """
    Write a host document into a private temporary directory for rendering.

    The directory is removed on exit, including when rendering fails.
    """
    host_dir = Path(tempfile.mkdtemp(prefix="billshare-"))
    try:
        host_path: Path = host_dir / "bill.html"
        host_path.write_text(document, encoding="utf-8")
        yield host_path
    finally:
        shutil.rmtree(host_dir, ignore_errors=True)
        logger.debug(f"Removed staging host {host_dir}")


def trim_bottom(image: Image.Image, margin_px: int) -> Image.Image:
    """Drop blank rows below the last drawn content, keeping `margin_px` of padding."""
    background: Image.Image = Image.new("RGB", image.size, "white")
    bbox = ImageChops.difference(image.convert("RGB"), background).getbbox()
    content_bottom: int = bbox[3] if bbox else 0
    bottom: int = min(image.height, max(content_bottom + margin_px, 1))
    return image.crop((0, 0, image.width, bottom))


def page_stylesheet(width_px: int, height_px: int) -> str:
    return f"@page {{ size: {width_px}px {height_px}px; margin: 0; }}"


@service
class WeasyPrintRasterizer(IRasterizer):
    INITIAL_PAGE_HEIGHT_PX = 3000

    def __init__(
        self,
        width_px: Annotated[int, Inject(param="RASTER_WIDTH_PX")],
        padding_px: Annotated[int, Inject(param="RASTER_PADDING_PX")],
        scale: Annotated[float, Inject(param="RASTER_SCALE")],
    ) -> None:
        self._width_px: int = width_px
        self._padding_px: int = padding_px
        self._scale: float = scale

    def build_host_document(self, html: str) -> str:
        return HOST_DOCUMENT_TEMPLATE.format(
            width=self._width_px,
            padding=self._padding_px,
            content=html,
        )

    @override
    async def rasterize(self, html: str) -> Raster:
        logger.info(f"Rasterizing bill at {self._width_px}px, scale {self._scale}")
        async with staging_host(self.build_host_document(html)) as host_path:
            image: Image.Image = await asyncio.to_thread(self._render, host_path)

        logger.info(f"Rasterized bill to {image.width}x{image.height}px")
        return Raster(image=image)

    def _layout(self, host_path: Path, page_height_px: int) -> Any:
        from weasyprint import CSS, HTML

        return HTML(filename=str(host_path)).render(
            stylesheets=[CSS(string=page_stylesheet(self._width_px, page_height_px))]
        )

    def layout_single_page(self, host_path: Path) -> tuple[bytes, int]:
        """
        Lay the bill out on one page tall enough to hold all of it.

        Content that overflows a page is laid out again on a taller page, so
        the raster never has page-break gaps in it.
        """
        page_height_px: int = self.INITIAL_PAGE_HEIGHT_PX
        document = self._layout(host_path, page_height_px)
        while len(document.pages) > 1:
            page_height_px *= len(document.pages) + 1
            logger.debug(f"Bill overflowed, laying out again at {page_height_px}px")
            document = self._layout(host_path, page_height_px)

        return document.write_pdf(), page_height_px

    def _render(self, host_path: Path) -> Image.Image:
        pdf_bytes, _ = self.layout_single_page(host_path)
        zoom: float = self._scale * PX_PER_PT
        with pymupdf.open(stream=pdf_bytes, filetype="pdf") as pdf:
            if pdf.page_count != 1:
                raise ValueError(f"Expected a single laid-out page, got {pdf.page_count}")
            pixmap = pdf[0].get_pixmap(matrix=pymupdf.Matrix(zoom, zoom), alpha=False)
            image: Image.Image = Image.frombytes(
                "RGB", (pixmap.width, pixmap.height), pixmap.samples
            )

        return trim_bottom(image, round(self._padding_px * self._scale))
