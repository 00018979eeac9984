"""Application configuration. Loads from environment and .env file."""
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
# Load .env from cwd, then backend/.env, then project root .env
load_dotenv()
load_dotenv(BASE_DIR / ".env")
load_dotenv(BASE_DIR.parent / ".env")

# Media types
WEBP_MEDIA_TYPE = "image/webp"
ANIMATED_MEDIA_TYPE = "image/gif"

# Quality (1-100). Anything outside the range falls back to DEFAULT_QUALITY.
MIN_QUALITY = 1
MAX_QUALITY = 100
DEFAULT_QUALITY = int(os.getenv("DEFAULT_QUALITY", "80"))

# Encoder effort (Pillow "method", 0-6). Animated sources get the higher setting.
STATIC_EFFORT = int(os.getenv("STATIC_EFFORT", "4"))
ANIMATED_EFFORT = int(os.getenv("ANIMATED_EFFORT", "6"))

# Advisory upload size for the client; the convert endpoint does not enforce it.
ADVISED_MAX_IMAGE_SIZE_MB = int(os.getenv("ADVISED_MAX_IMAGE_SIZE_MB", "10"))
ADVISED_MAX_IMAGE_SIZE_BYTES = ADVISED_MAX_IMAGE_SIZE_MB * 1024 * 1024

# Concurrency (codec thread pool)
MAX_WORKERS = int(os.getenv("MAX_WORKERS", str(min(32, (os.cpu_count() or 4) + 4))))

# Server (for uvicorn)
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
# CORS: comma-separated origins, e.g. "http://localhost:3000,http://127.0.0.1:3000"
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",") if o.strip()]

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("converter")
