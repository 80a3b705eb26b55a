from pathlib import Path
import os

from dotenv import load_dotenv

# Load environment variables from the working directory and the repo root (if present).
REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(Path.cwd() / ".env")
load_dotenv(REPO_ROOT / ".env")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./tasksync.db")
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

_cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000")
CORS_ORIGINS = [origin.strip() for origin in _cors_origins.split(",") if origin.strip()]

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Client side (task list view)
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
TASKS_PATH = "/api/tasks"
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10"))
