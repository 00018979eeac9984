"""Conversion request/response models."""
from dataclasses import dataclass


class ConversionError(Exception):
    """Client-correctable request problem, reported with its own status and message."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingFileError(ConversionError):
    def __init__(self):
        super().__init__("No image file provided")


class UnsupportedTypeError(ConversionError):
    def __init__(self):
        super().__init__("The provided file is not an image")


@dataclass
class ConversionRequest:
    image_bytes: bytes
    declared_media_type: str
    quality: int


@dataclass
class ConversionResult:
    """Outcome of one conversion; lives only as long as the request."""

    webp_url: str
    original_size: int
    webp_size: int
    size_reduction: float
    quality: int
    is_animated: bool

    def to_dict(self) -> dict:
        return {
            "success": True,
            "webpUrl": self.webp_url,
            "originalSize": self.original_size,
            "webpSize": self.webp_size,
            "sizeReduction": self.size_reduction,
            "quality": self.quality,
            "isAnimated": self.is_animated,
        }
