import pytest

from billshare.core.models import PageSize
from billshare.export.pagination import scaled_height_mm, tile_pages

A4 = PageSize(width_mm=210, height_mm=295)
RASTER_WIDTH = 1600


def raster_height_for(pages: float) -> int:
    """Pixel height of a raster that scales to `pages` page heights."""
    return round(pages * A4.height_mm * RASTER_WIDTH / A4.width_mm)


class TestScaledHeight:
    def test_scales_to_page_width(self):
        assert scaled_height_mm(800, 1600, 210) == pytest.approx(420)

    def test_rejects_zero_width(self):
        with pytest.raises(ValueError):
            scaled_height_mm(0, 100, 210)


class TestTilePages:
    def test_short_raster_fits_one_page(self):
        slices = tile_pages(RASTER_WIDTH, raster_height_for(0.4), A4)

        assert len(slices) == 1
        assert slices[0].offset_mm == 0
        assert slices[0].content_height_mm == pytest.approx(0.4 * 295, abs=0.1)

    def test_two_and_a_half_pages(self):
        height = raster_height_for(2.5)
        image_height = scaled_height_mm(RASTER_WIDTH, height, A4.width_mm)

        slices = tile_pages(RASTER_WIDTH, height, A4)

        assert len(slices) == 3
        assert [s.index for s in slices] == [0, 1, 2]
        assert [s.offset_mm for s in slices] == pytest.approx([0, -295, -590], abs=0.1)
        assert sum(s.content_height_mm for s in slices) == pytest.approx(image_height)
        assert slices[-1].padding_mm == pytest.approx(0.5 * 295, abs=0.1)

    def test_windows_tile_without_gaps_or_overlaps(self):
        slices = tile_pages(RASTER_WIDTH, raster_height_for(3.7), A4)

        for previous, current in zip(slices, slices[1:]):
            assert current.content_top_mm == pytest.approx(
                previous.content_top_mm + previous.content_height_mm
            )
        assert all(s.padding_mm == pytest.approx(0, abs=1e-6) for s in slices[:-1])

    def test_exact_multiple_ends_with_blank_page(self):
        height = 2 * 295 * 2  # two pages at 2 px/mm when width is 420 px
        slices = tile_pages(420, height, A4)

        assert len(slices) == 3
        assert slices[-1].content_height_mm == 0
        assert slices[-1].padding_mm == 295

    def test_offsets_never_positive(self):
        slices = tile_pages(RASTER_WIDTH, raster_height_for(5.2), A4)

        assert all(s.offset_mm <= 0 for s in slices)
        assert slices[0].offset_mm == 0
