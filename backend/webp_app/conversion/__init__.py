from .service import ConversionService, compute_size_reduction, resolve_quality
from .models import ConversionError, ConversionRequest, ConversionResult

__all__ = [
    "ConversionService",
    "ConversionError",
    "ConversionRequest",
    "ConversionResult",
    "compute_size_reduction",
    "resolve_quality",
]
