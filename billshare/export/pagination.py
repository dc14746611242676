from billshare.core.models import PageSize, PageSlice


def scaled_height_mm(
    raster_width_px: int, raster_height_px: int, page_width_mm: float
) -> float:
    """Height of the raster once it is scaled to span the page width."""
    if raster_width_px <= 0:
        raise ValueError(f"Raster width must be positive, got {raster_width_px}")
    return raster_height_px * page_width_mm / raster_width_px


def _page_slice(
    index: int, offset_mm: float, image_height_mm: float, page_height_mm: float
) -> PageSlice:
    content_top: float = -offset_mm
    content_height: float = max(
        0.0, min(image_height_mm, content_top + page_height_mm) - content_top
    )
    return PageSlice(
        index=index,
        offset_mm=offset_mm,
        content_top_mm=content_top,
        content_height_mm=content_height,
        padding_mm=page_height_mm - content_height,
    )


def tile_pages(
    raster_width_px: int,
    raster_height_px: int,
    page_size: PageSize = PageSize(),
) -> list[PageSlice]:
    """
    Split a full-height raster into page windows.

    The first page shows the raster from its top edge. Each following page is
    added while the height left over is still non-negative and shows the raster
    shifted up by one more page height, so the last page may end in blank
    padding.
    """
    image_height: float = scaled_height_mm(
        raster_width_px, raster_height_px, page_size.width_mm
    )
    page_height: float = page_size.height_mm

    slices: list[PageSlice] = [_page_slice(0, 0.0, image_height, page_height)]
    height_left: float = image_height - page_height

    while height_left >= 0:
        offset: float = height_left - image_height
        slices.append(_page_slice(len(slices), offset, image_height, page_height))
        height_left -= page_height

    return slices
