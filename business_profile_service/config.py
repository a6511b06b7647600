import os
from dotenv import load_dotenv

load_dotenv() # Optional: Load .env file

APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
APP_PORT = int(os.getenv("APP_PORT", "8004")) # Port for this service

# Request header carrying the caller's identity
CALLER_HEADER = os.getenv("CALLER_HEADER", "X-Caller-Id")
