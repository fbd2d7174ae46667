import os
import logging
from dotenv import load_dotenv
from sqlalchemy.engine import URL

# Railway injects config directly; everywhere else read it from .env
if "RAILWAY_ENVIRONMENT" not in os.environ:
    load_dotenv()

# Configure logging
DEBUG_LOGGING = os.getenv("DEBUG_LOGGING", "false").lower() in ("true", "1", "yes")
LOG_LEVEL = logging.DEBUG if DEBUG_LOGGING else logging.INFO

# Configure the logger
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger("video-roulette")

# Database Configuration
DB_USER = os.getenv("DB_USER", "postgres")
DB_PASSWORD = os.getenv("DB_PASSWORD", "")
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_NAME = os.getenv("DB_NAME", "postgres")
DB_SSLMODE = os.getenv("DB_SSLMODE", "disable")


def build_database_url() -> str:
    """
    DATABASE_URL wins when set; otherwise assemble a PostgreSQL URL from the DB_* variables.
    """
    override = os.getenv("DATABASE_URL")
    if override:
        return override

    url = URL.create(
        "postgresql+psycopg2",
        username=DB_USER,
        password=DB_PASSWORD or None,
        host=DB_HOST,
        database=DB_NAME,
        query={"sslmode": DB_SSLMODE},
    )
    return url.render_as_string(hide_password=False)


DATABASE_URL = build_database_url()

# Video Info API
TIKWM_API_URL = os.getenv("TIKWM_API_URL", "https://tikwm.com/api/")
TIKWM_TIMEOUT = float(os.getenv("TIKWM_TIMEOUT", "15"))

# Bulk import source for /fetch, disabled when empty
IMPORT_LIST_URL = os.getenv("IMPORT_LIST_URL", "")

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))
