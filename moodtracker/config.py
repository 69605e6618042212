import os
from dotenv import load_dotenv

load_dotenv()

# --- Server ---
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5001"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- JWT Configuration ---
JWT_SECRET = os.getenv("JWT_SECRET", "")
JWT_ALGORITHM = "HS256"
JWT_EXPIRY_HOURS = int(os.getenv("JWT_EXPIRY_HOURS", "720"))  # 30 days

# --- Database ---
DATABASE_URL = os.getenv("DATABASE_URL", "")

# Fix for common SQLAlchemy issues with postgres:// vs postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# --- Client ---
API_URL = os.getenv("MOODTRACKER_API_URL", "http://localhost:5001/api")
STORAGE_PATH = os.getenv(
    "MOODTRACKER_STORAGE",
    os.path.join(os.path.expanduser("~"), ".moodtracker", "storage.json"),
)


def missing_settings() -> list[str]:
    """Names of the required server settings that are empty."""
    required = {"DATABASE_URL": DATABASE_URL, "JWT_SECRET": JWT_SECRET}
    return [name for name, value in required.items() if not value]
