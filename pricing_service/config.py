import os
from dotenv import load_dotenv

load_dotenv() # Optional: Load .env file

APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
APP_PORT = int(os.getenv("APP_PORT", "8002")) # Port for this service

# Collaborator services, resolved at startup
INVENTORY_SERVICE_URL = os.getenv("INVENTORY_SERVICE_URL", "http://inventory_service:8001")
LEDGER_SERVICE_URL = os.getenv("LEDGER_SERVICE_URL", "http://ledger_service:8003")
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10.0"))

# Rule parameters
NEAR_EXPIRATION_DAYS = int(os.getenv("NEAR_EXPIRATION_DAYS", "3"))
LOW_STOCK_THRESHOLD = int(os.getenv("LOW_STOCK_THRESHOLD", "10"))
