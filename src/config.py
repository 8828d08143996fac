"""Configuration module for the ITS backend.

This module provides centralized configuration management, including directory
paths, API server settings, token signing, persistence and upload settings.
All configuration values can be overridden via environment variables.
"""

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Directory Configuration ---

# Root directory of the project
ROOT_DIR = Path(__file__).parent.parent.resolve()

# Data directory name
DATA_DIR_NAME = "data"
DATA_DIR = ROOT_DIR / DATA_DIR_NAME

# Uploaded learning material files (file.upload-dir)
FILE_UPLOAD_DIR = Path(os.getenv("FILE_UPLOAD_DIR", str(DATA_DIR / "uploads")))

# --- API Server Configuration ---

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "8080"))

# CORS allowed origins (comma-separated list). The single-page front-end is
# served from localhost:3000 during development.
_CORS_ALLOWED_ORIGINS_STR: str = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "http://localhost:3000",
)
CORS_ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in _CORS_ALLOWED_ORIGINS_STR.split(",")
    if origin.strip()
]

# --- Token Configuration ---

# Signing key for bearer tokens (jwt.secret). Required; validated at startup.
JWT_SECRET: Optional[str] = os.getenv("JWT_SECRET")

JWT_ALGORITHM: str = "HS256"

# Token lifetime in milliseconds (jwt.expiration-ms), 24h by default
JWT_EXPIRATION_MS: int = int(os.getenv("JWT_EXPIRATION_MS", "86400000"))

# HS256 needs at least 256 bits of key material
JWT_MIN_SECRET_BYTES: int = 32

# --- Password Hashing ---

# Bcrypt rounds for password hashing (higher = more secure but slower)
BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

# --- Persistence Configuration ---

DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR}/its.db")

# Pool size for server databases; ignored for SQLite
DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "5"))

# --- Content Configuration ---

# Number of attempts when a concurrent edit trips the material version guard
CONTENT_UPDATE_MAX_ATTEMPTS: int = int(os.getenv("CONTENT_UPDATE_MAX_ATTEMPTS", "3"))

# --- Logging ---

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
