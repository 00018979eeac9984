"""Image to WebP conversion service with a bounded worker pool for the codec."""
import asyncio
import base64
import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from webp_app.config import (
    ANIMATED_MEDIA_TYPE,
    DEFAULT_QUALITY,
    MAX_QUALITY,
    MAX_WORKERS,
    MIN_QUALITY,
    WEBP_MEDIA_TYPE,
)
from webp_app.conversion.codec import Codec, encode_webp
from webp_app.conversion.models import ConversionRequest, ConversionResult

logger = logging.getLogger("converter.service")


def resolve_quality(raw: Optional[str]) -> int:
    """Parse the requested quality. Absent, non-numeric or out-of-range values give the default."""
    if raw is None or raw == "":
        return DEFAULT_QUALITY
    try:
        quality = int(str(raw).strip())
    except (TypeError, ValueError):
        logger.warning("Invalid quality %r, falling back to %s", raw, DEFAULT_QUALITY)
        return DEFAULT_QUALITY
    if not MIN_QUALITY <= quality <= MAX_QUALITY:
        logger.warning("Quality %s out of range, falling back to %s", quality, DEFAULT_QUALITY)
        return DEFAULT_QUALITY
    return quality


def compute_size_reduction(original_size: int, encoded_size: int) -> float:
    """Percent saved, 2 decimals with halves rounded up. Negative when the output is larger; 0.0 for empty input."""
    if original_size <= 0:
        return 0.0
    reduction = (original_size - encoded_size) / original_size * 100
    return math.floor(reduction * 100 + 0.5) / 100


def to_data_url(data: bytes, media_type: str = WEBP_MEDIA_TYPE) -> str:
    b64 = base64.b64encode(data).decode("ascii")
    return f"data:{media_type};base64,{b64}"


def is_animated_type(media_type: Optional[str]) -> bool:
    return media_type == ANIMATED_MEDIA_TYPE


class ConversionService:
    """Runs the codec off the event loop and shapes the result."""

    def __init__(self, codec: Codec = encode_webp, max_workers: int = MAX_WORKERS):
        self._codec = codec
        self._executor = ThreadPoolExecutor(max_workers=max_workers)
        logger.info("ConversionService initialized with max_workers=%s", max_workers)

    async def convert(self, request: ConversionRequest) -> ConversionResult:
        animated = is_animated_type(request.declared_media_type)
        original_size = len(request.image_bytes)
        loop = asyncio.get_running_loop()
        webp_bytes = await loop.run_in_executor(
            self._executor,
            self._codec,
            request.image_bytes,
            request.quality,
            animated,
        )
        webp_size = len(webp_bytes)
        reduction = compute_size_reduction(original_size, webp_size)
        logger.info(
            "Converted %s (%d bytes) -> webp (%d bytes, %.2f%%) quality=%s animated=%s",
            request.declared_media_type, original_size, webp_size, reduction, request.quality, animated,
        )
        return ConversionResult(
            webp_url=to_data_url(webp_bytes),
            original_size=original_size,
            webp_size=webp_size,
            size_reduction=reduction,
            quality=request.quality,
            is_animated=animated,
        )

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False)


# Singleton
_conversion_service: Optional[ConversionService] = None


def get_conversion_service() -> ConversionService:
    global _conversion_service
    if _conversion_service is None:
        _conversion_service = ConversionService()
    return _conversion_service


def shutdown_conversion_service() -> None:
    global _conversion_service
    if _conversion_service is not None:
        _conversion_service.shutdown()
        _conversion_service = None
