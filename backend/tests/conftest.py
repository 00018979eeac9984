import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from webp_app.conversion.service import ConversionService, get_conversion_service
from webp_app.main import app


class RecordingCodec:
    """Stands in for the Pillow codec and records every call."""

    def __init__(self, output: bytes = b"mock-webp-buffer", error: Exception = None):
        self.output = output
        self.error = error
        self.calls = []

    def __call__(self, data: bytes, quality: int, animated: bool) -> bytes:
        self.calls.append((data, quality, animated))
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def codec():
    return RecordingCodec()


@pytest.fixture
def client(codec):
    service = ConversionService(codec=codec, max_workers=2)
    app.dependency_overrides[get_conversion_service] = lambda: service
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    service.shutdown()


@pytest.fixture
def real_client():
    service = ConversionService(max_workers=2)
    app.dependency_overrides[get_conversion_service] = lambda: service
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    service.shutdown()


def make_image(fmt: str = "PNG", size=(64, 48), mode: str = "RGB", color=(200, 30, 30)) -> bytes:
    img = Image.new(mode, size, color)
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def make_animated_gif(frames: int = 3, duration: int = 120, loop=0) -> bytes:
    colors = [(255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 0)]
    images = [Image.new("RGB", (32, 32), colors[i % len(colors)]) for i in range(frames)]
    buf = io.BytesIO()
    images[0].save(
        buf,
        format="GIF",
        save_all=True,
        append_images=images[1:],
        duration=duration,
        **({} if loop is None else {"loop": loop}),
    )
    return buf.getvalue()
