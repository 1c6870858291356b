import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

BASE_DIR = Path(__file__).resolve().parents[1]

# We default to a local SQLite database file next to the project
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./cloud_kitchen.db")

# Compiled Angular build (ng build output)
STATIC_DIR = Path(
    os.getenv("STATIC_DIR", str(BASE_DIR / "frontend" / "dist" / "frontend" / "browser"))
)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [
    o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
]

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))
