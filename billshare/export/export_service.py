import logging
import re
from pathlib import Path
from typing import Annotated

from wireup import Inject, service

from billshare.core.exceptions import RasterizationError
from billshare.core.models import PageSize, PageSlice, Raster
from billshare.export.document_assembler import IDocumentAssembler
from billshare.export.pagination import tile_pages
from billshare.export.rasterizer import IRasterizer

logger: logging.Logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "bill.pdf"


def safe_document_name(filename: str) -> str:
    """Reduce a caller-supplied name to a plain `.pdf` basename."""
    name: str = Path(filename.replace("\\", "/")).name
    stem: str = name[:-4] if name.lower().endswith(".pdf") else name
    stem = re.sub(r"[^A-Za-z0-9 ._-]", "", stem).strip(" .")
    return f"{stem}.pdf" if stem else DEFAULT_FILENAME


@service
class BillExportService:
    def __init__(
        self,
        rasterizer: IRasterizer,
        assembler: IDocumentAssembler,
        export_dir: Annotated[str, Inject(param="EXPORT_DIR")],
        page_width_mm: Annotated[float, Inject(param="PAGE_WIDTH_MM")],
        page_height_mm: Annotated[float, Inject(param="PAGE_HEIGHT_MM")],
    ) -> None:
        self._rasterizer: IRasterizer = rasterizer
        self._assembler: IDocumentAssembler = assembler
        self._export_dir = Path(export_dir)
        self._page_size = PageSize(width_mm=page_width_mm, height_mm=page_height_mm)

    async def export_bill_as_document(
        self, html: str, filename: str = DEFAULT_FILENAME
    ) -> Path:
        """
        Rasterize a bill and save it as a paginated PDF:
        1. Rasterization (staged off-screen at a fixed width)
        2. Tiling into page windows
        3. Assembly and save under the export directory
        """
        destination: Path = self._export_dir / safe_document_name(filename)

        try:
            raster: Raster = await self._rasterizer.rasterize(html)
            slices: list[PageSlice] = tile_pages(
                raster.width_px, raster.height_px, self._page_size
            )
            logger.info(
                f"Tiled {raster.width_px}x{raster.height_px}px raster into {len(slices)} pages"
            )
            return await self._assembler.assemble(
                raster, slices, self._page_size, destination
            )
        except Exception as e:
            logger.error(
                f"Failed to export bill to {destination}: {str(e)}", exc_info=True
            )
            raise RasterizationError(destination.name) from e
