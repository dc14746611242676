import asyncio
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from typing_extensions import override

import pymupdf
from PIL import Image
from wireup import abstract, service

from billshare.core.models import PageSize, PageSlice, Raster

logger: logging.Logger = logging.getLogger(__name__)

POINTS_PER_MM: float = 72 / 25.4


@abstract
class IDocumentAssembler(Protocol):
    async def assemble(
        self,
        raster: Raster,
        slices: list[PageSlice],
        page_size: PageSize,
        destination: Path,
    ) -> Path:
        """Write one page per slice to `destination` and return the saved path."""
        ...


def window_bounds(raster: Raster, page: PageSlice, page_size: PageSize) -> tuple[int, int, int]:
    """Return `(top_px, bottom_px, page_height_px)` of the raster window shown on a page."""
    px_per_mm: float = raster.width_px / page_size.width_mm
    page_height_px: int = max(1, round(page_size.height_mm * px_per_mm))
    top_px: int = round(page.content_top_mm * px_per_mm)
    # Rounding both ends can make the window one row taller than the page.
    bottom_px: int = min(
        raster.height_px,
        top_px + page_height_px,
        round((page.content_top_mm + page.content_height_mm) * px_per_mm),
    )
    return top_px, bottom_px, page_height_px


def crop_page_image(raster: Raster, page: PageSlice, page_size: PageSize) -> Image.Image:
    """Cut the raster window shown on a page; padding below the content stays white."""
    top_px, bottom_px, page_height_px = window_bounds(raster, page, page_size)

    canvas: Image.Image = Image.new("RGB", (raster.width_px, page_height_px), "white")
    if bottom_px > top_px:
        window: Image.Image = raster.image.crop((0, top_px, raster.width_px, bottom_px))
        canvas.paste(window, (0, 0))
    return canvas


@service
class PyMuPdfAssembler(IDocumentAssembler):
    @override
    async def assemble(
        self,
        raster: Raster,
        slices: list[PageSlice],
        page_size: PageSize,
        destination: Path,
    ) -> Path:
        if not slices:
            raise ValueError("Cannot assemble a document without pages")

        await asyncio.to_thread(self._write, raster, slices, page_size, destination)
        logger.info(f"Saved {len(slices)}-page document to {destination}")
        return destination

    def _write(
        self,
        raster: Raster,
        slices: list[PageSlice],
        page_size: PageSize,
        destination: Path,
    ) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        width_pt: float = page_size.width_mm * POINTS_PER_MM
        height_pt: float = page_size.height_mm * POINTS_PER_MM

        # Written beside the destination so the final move is atomic.
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{destination.stem}-", suffix=".pdf", dir=destination.parent
        )
        os.close(fd)
        tmp_path = Path(tmp_name)
        try:
            with pymupdf.open() as document:
                for page_slice in slices:
                    page = document.new_page(width=width_pt, height=height_pt)
                    page_image = Raster(image=crop_page_image(raster, page_slice, page_size))
                    page.insert_image(page.rect, stream=page_image.to_png_bytes())
                document.save(str(tmp_path))
            os.replace(tmp_path, destination)
        finally:
            tmp_path.unlink(missing_ok=True)
