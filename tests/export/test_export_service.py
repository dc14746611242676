from pathlib import Path

import pytest
from PIL import Image

from billshare.core.exceptions import RasterizationError
from billshare.core.models import PageSize, PageSlice, Raster
from billshare.export.export_service import BillExportService, safe_document_name


class FakeRasterizer:
    def __init__(self, width_px: int, height_px: int) -> None:
        self.width_px: int = width_px
        self.height_px: int = height_px
        self.received: list[str] = []

    async def rasterize(self, html: str) -> Raster:
        self.received.append(html)
        return Raster(image=Image.new("RGB", (self.width_px, self.height_px), "white"))


class FailingRasterizer:
    async def rasterize(self, html: str) -> Raster:
        raise RuntimeError("renderer crashed")


class RecordingAssembler:
    def __init__(self) -> None:
        self.slices: list[PageSlice] = []
        self.destination: Path | None = None

    async def assemble(
        self,
        raster: Raster,
        slices: list[PageSlice],
        page_size: PageSize,
        destination: Path,
    ) -> Path:
        self.slices = slices
        self.destination = destination
        return destination


def make_service(rasterizer, assembler, export_dir: Path) -> BillExportService:
    return BillExportService(
        rasterizer=rasterizer,
        assembler=assembler,
        export_dir=str(export_dir),
        page_width_mm=210,
        page_height_mm=295,
    )


class TestSafeDocumentName:
    def test_keeps_plain_names(self):
        assert safe_document_name("Table 5 Bill.pdf") == "Table 5 Bill.pdf"

    def test_adds_suffix_and_strips_directories(self):
        assert safe_document_name("../../etc/passwd") == "passwd.pdf"
        assert safe_document_name("C:\\bills\\table7") == "table7.pdf"

    def test_falls_back_for_empty_names(self):
        assert safe_document_name("///") == "bill.pdf"
        assert safe_document_name(".pdf") == "bill.pdf"


@pytest.mark.asyncio
class TestBillExportService:
    async def test_tiles_raster_and_saves_under_export_dir(self, tmp_path):
        # 2.5 pages tall at 800px wide
        height_px = round(2.5 * 295 * 800 / 210)
        rasterizer = FakeRasterizer(800, height_px)
        assembler = RecordingAssembler()
        service = make_service(rasterizer, assembler, tmp_path)

        saved = await service.export_bill_as_document("<p>bill</p>", "table-5")

        assert saved == tmp_path / "table-5.pdf"
        assert rasterizer.received == ["<p>bill</p>"]
        assert len(assembler.slices) == 3
        assert sum(s.content_height_mm for s in assembler.slices) == pytest.approx(
            height_px * 210 / 800
        )

    async def test_failure_surfaces_single_user_error(self, tmp_path):
        service = make_service(FailingRasterizer(), RecordingAssembler(), tmp_path)

        with pytest.raises(RasterizationError) as exc_info:
            await service.export_bill_as_document("<p>bill</p>", "bill.pdf")

        assert str(exc_info.value) == "Failed to generate PDF. Please try again."
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert list(tmp_path.iterdir()) == []
