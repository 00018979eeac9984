"""API routes for image to WebP conversion."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import FormData, UploadFile

from webp_app.config import (
    ADVISED_MAX_IMAGE_SIZE_BYTES,
    ADVISED_MAX_IMAGE_SIZE_MB,
    DEFAULT_QUALITY,
    MAX_QUALITY,
    MIN_QUALITY,
)
from webp_app.conversion.models import (
    ConversionError,
    ConversionRequest,
    MissingFileError,
    UnsupportedTypeError,
)
from webp_app.conversion.service import ConversionService, get_conversion_service, resolve_quality

logger = logging.getLogger("converter.api")
router = APIRouter(prefix="/api", tags=["converter"])

CONVERSION_FAILED = "Failed to convert image"


def _text_field(form: FormData, name: str) -> Optional[str]:
    value = form.get(name)
    return value if isinstance(value, str) else None


async def _read_conversion_request(form: FormData, quality: int) -> ConversionRequest:
    """Validate the image part (presence, then declared type) and read it into memory."""
    upload = form.get("image")
    if not isinstance(upload, UploadFile):
        raise MissingFileError()
    media_type = upload.content_type or ""
    if not media_type.startswith("image/"):
        raise UnsupportedTypeError()
    data = await upload.read()
    return ConversionRequest(image_bytes=data, declared_media_type=media_type, quality=quality)


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/limits")
def get_limits():
    """Advisory limits for the client. The convert endpoint does not enforce the size."""
    return {
        "max_image_size_mb": ADVISED_MAX_IMAGE_SIZE_MB,
        "max_image_size_bytes": ADVISED_MAX_IMAGE_SIZE_BYTES,
        "default_quality": DEFAULT_QUALITY,
        "min_quality": MIN_QUALITY,
        "max_quality": MAX_QUALITY,
    }


@router.post("/convert-to-webp")
async def convert_to_webp(
    request: Request,
    svc: ConversionService = Depends(get_conversion_service),
):
    """Convert one uploaded image (form fields `image`, `quality`) to an inline WebP data URL."""
    try:
        async with request.form() as form:
            quality = resolve_quality(_text_field(form, "quality"))
            conversion = await _read_conversion_request(form, quality)
        result = await svc.convert(conversion)
        return result.to_dict()
    except ConversionError as e:
        logger.info("Rejected conversion request: %s", e.message)
        return JSONResponse(status_code=e.status_code, content={"error": e.message})
    except Exception as e:
        logger.exception("Error converting image: %s", e)
        return JSONResponse(status_code=500, content={"error": CONVERSION_FAILED})
