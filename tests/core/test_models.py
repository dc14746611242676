import base64

from PIL import Image

from billshare.core.models import Raster

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class TestRaster:
    def test_png_bytes_carry_png_signature(self):
        raster = Raster(image=Image.new("RGB", (4, 3), "white"))

        assert raster.to_png_bytes().startswith(PNG_SIGNATURE)

    def test_data_url_embeds_png(self):
        raster = Raster(image=Image.new("RGB", (4, 3), "black"))

        data_url = raster.to_data_url()

        prefix = "data:image/png;base64,"
        assert data_url.startswith(prefix)
        payload = base64.b64decode(data_url.removeprefix(prefix))
        assert payload == raster.to_png_bytes()
