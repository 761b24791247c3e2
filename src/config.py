"""Configuration module for the homework tracker service.

This module provides centralized configuration management, including the
database location, API server settings, authentication and pagination
defaults. All configuration values can be overridden via environment
variables.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Directory Configuration ---

# Root directory of the project
ROOT_DIR = Path(__file__).parent.parent.resolve()

# Data directory name
DATA_DIR_NAME = "data"
DATA_DIR = ROOT_DIR / DATA_DIR_NAME

# --- Database Configuration ---

# Any SQLAlchemy URL; defaults to a SQLite file inside DATA_DIR
DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR}/homework.db")

# --- API Server Configuration ---

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "3000"))

# Every route is mounted under this prefix
API_PREFIX: str = os.getenv("API_PREFIX", "/api")

# CORS allowed origins (comma-separated list)
_CORS_ALLOWED_ORIGINS_STR: str = os.getenv("CORS_ALLOWED_ORIGINS", "*")
CORS_ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in _CORS_ALLOWED_ORIGINS_STR.split(",")
    if origin.strip()
]

# --- Logging Configuration ---

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Authentication Configuration ---

JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "change-me-in-production")
JWT_ALGORITHM: str = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES: int = int(
    os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24))
)

# Bcrypt rounds for password hashing (higher = more secure but slower)
BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

# --- Listing Configuration ---

DEFAULT_PAGE: int = 1
DEFAULT_PAGE_LIMIT: int = int(os.getenv("DEFAULT_PAGE_LIMIT", "10"))

# --- Demo Data Configuration ---

# Total number of users created by the seeder, fixed accounts included
SEED_USER_COUNT: int = int(os.getenv("SEED_USER_COUNT", "20"))
SEED_ASSIGNMENT_COUNT: int = int(os.getenv("SEED_ASSIGNMENT_COUNT", "50"))

# Password given to every seeded account
DEFAULT_PASSWORD: str = os.getenv("DEFAULT_PASSWORD", "password")
