import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()
IS_PRODUCTION = ENVIRONMENT == "production"

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./caregiver_shift_tracker.db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO" if IS_PRODUCTION else "DEBUG").upper()

# Comma separated; the mobile app runs on 8081 under Expo
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS", "http://localhost:8081,http://localhost:3000"
).split(",")

SECURITY_HEADERS_ENABLED = os.getenv("SECURITY_HEADERS_ENABLED", "true").lower() == "true"

# Insert demo clients/schedules/tasks on startup (local development only)
SEED_SAMPLE_DATA = os.getenv("SEED_SAMPLE_DATA", "false").lower() == "true"

# Visit lifecycle
EARLY_START_GRACE_MINUTES = int(os.getenv("EARLY_START_GRACE_MINUTES", "30"))

# Busy/locked retry policy for status writes: attempt n waits n * backoff
STATUS_WRITE_MAX_RETRIES = int(os.getenv("STATUS_WRITE_MAX_RETRIES", "3"))
STATUS_WRITE_BACKOFF_SECONDS = float(os.getenv("STATUS_WRITE_BACKOFF_SECONDS", "0.1"))

DB_LOG_SLOW_QUERIES = os.getenv("DB_LOG_SLOW_QUERIES", "true").lower() == "true"
DB_SLOW_QUERY_THRESHOLD = float(os.getenv("DB_SLOW_QUERY_THRESHOLD", "1.0"))
DB_BUSY_TIMEOUT_MS = int(os.getenv("DB_BUSY_TIMEOUT_MS", "30000"))
