import os
from dotenv import load_dotenv

load_dotenv() # Load .env file from project root if running locally

DATABASE_USER = os.getenv("POSTGRES_USER", "user")
DATABASE_PASSWORD = os.getenv("POSTGRES_PASSWORD", "password")
DATABASE_HOST = os.getenv("POSTGRES_HOST", "postgres") # Docker service name
DATABASE_PORT = os.getenv("POSTGRES_PORT", "5432")
DATABASE_NAME = os.getenv("POSTGRES_DB", "inventory_db")

# Async database URL for SQLAlchemy; DATABASE_URL overrides the Postgres parts
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql+asyncpg://{DATABASE_USER}:{DATABASE_PASSWORD}@{DATABASE_HOST}:{DATABASE_PORT}/{DATABASE_NAME}",
)
DATABASE_ECHO = os.getenv("DATABASE_ECHO", "false").lower() == "true"

# Restart handling: restore the newest snapshot on startup, save one on shutdown
SNAPSHOT_ON_SHUTDOWN = os.getenv("SNAPSHOT_ON_SHUTDOWN", "true").lower() == "true"

# Status derivation thresholds
LOW_STOCK_THRESHOLD = int(os.getenv("LOW_STOCK_THRESHOLD", "10"))
EXPIRING_SOON_WINDOW_DAYS = int(os.getenv("EXPIRING_SOON_WINDOW_DAYS", "7"))

DEFAULT_PER_PAGE = int(os.getenv("DEFAULT_PER_PAGE", "50"))

# For Uvicorn binding inside container
APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
APP_PORT = int(os.getenv("APP_PORT", "8001"))
