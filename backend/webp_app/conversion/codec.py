"""WebP encoding with Pillow. Static images and frame-preserving animated GIFs."""
import io
import logging
from typing import Callable

from PIL import Image, ImageSequence

from webp_app.config import ANIMATED_EFFORT, STATIC_EFFORT

logger = logging.getLogger("converter.codec")

# (data, quality, animated) -> encoded bytes
Codec = Callable[[bytes, int, bool], bytes]


def _webp_mode(img: Image.Image) -> Image.Image:
    """WebP takes RGB or RGBA. Keep alpha when the source has any."""
    if img.mode in ("RGB", "RGBA"):
        return img
    if "A" in img.getbands() or "transparency" in img.info:
        return img.convert("RGBA")
    return img.convert("RGB")


def _encode_static(img: Image.Image, quality: int) -> bytes:
    out = io.BytesIO()
    _webp_mode(img).save(out, format="WEBP", quality=quality, method=STATIC_EFFORT)
    return out.getvalue()


def _encode_animated(img: Image.Image, quality: int) -> bytes:
    # GIFs without a loop extension play once; WebP needs loop=1 for that, 0 loops forever.
    loop = img.info.get("loop", 1)
    frames = []
    durations = []
    for frame in ImageSequence.Iterator(img):
        durations.append(frame.info.get("duration", img.info.get("duration", 0)))
        frames.append(_webp_mode(frame.copy()))
    out = io.BytesIO()
    frames[0].save(
        out,
        format="WEBP",
        save_all=True,
        append_images=frames[1:],
        duration=durations,
        loop=loop,
        quality=quality,
        method=ANIMATED_EFFORT,
        allow_mixed=True,
    )
    logger.debug("Encoded %d frame(s) as animated WebP", len(frames))
    return out.getvalue()


def encode_webp(data: bytes, quality: int, animated: bool = False) -> bytes:
    """
    Decode `data` and re-encode it as WebP.
    - animated: keep every frame with its timing and loop count, use the higher
      effort and let the encoder mix lossy and lossless frames.
    - otherwise: encode a single frame at `quality`.
    Errors from Pillow (corrupt or unsupported input) propagate.
    """
    with Image.open(io.BytesIO(data)) as img:
        if animated:
            return _encode_animated(img, quality)
        return _encode_static(img, quality)
