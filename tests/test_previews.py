# tests/test_previews.py
import io

import pytest
from PIL import Image

from instacaption.ui.previews import PreviewRegistry


def jpeg_bytes(size=(640, 480)):
    buf = io.BytesIO()
    Image.new("RGB", size, "blue").save(buf, format="JPEG")
    return buf.getvalue()


def test_thumbnail_fits_preview_size():
    reg = PreviewRegistry(size=64)
    h = reg.create("big.jpg", jpeg_bytes())
    img = reg.get(h)
    assert max(img.size) == 64
    assert reg.live_handles == 1


def test_handles_are_unique():
    reg = PreviewRegistry(size=8)
    data = jpeg_bytes((16, 16))
    assert reg.create("a", data) != reg.create("a", data)


def test_undecodable_bytes_still_get_an_owned_handle():
    reg = PreviewRegistry(size=8)
    h = reg.create("broken.png", b"definitely not an image")
    assert reg.get(h) is None
    assert reg.is_live(h)
    reg.release(h)
    assert reg.live_handles == 0


def test_double_release_is_an_error():
    reg = PreviewRegistry(size=8)
    h = reg.create("a.jpg", jpeg_bytes((16, 16)))
    reg.release(h)
    with pytest.raises(KeyError):
        reg.release(h)
