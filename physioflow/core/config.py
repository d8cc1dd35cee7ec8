"""
Basic configuration

- CORS origins for development and production
- Storage locations for the JSON document and the relational database
- Auth token settings
- Supports environment variables for production deployments
"""
import os

# Default localhost origins for development
DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
]

# Get additional CORS origins from environment variable
ADDITIONAL_CORS_ORIGINS = os.getenv("CORS_ORIGINS", "").split(",") if os.getenv("CORS_ORIGINS") else []

# Filter out empty strings from split
ADDITIONAL_CORS_ORIGINS = [origin.strip() for origin in ADDITIONAL_CORS_ORIGINS if origin.strip()]

# Combine default and additional origins
CORS_ORIGINS = DEFAULT_CORS_ORIGINS + ADDITIONAL_CORS_ORIGINS

# Document store (exercises, patients, programs, compliance)
DATA_FILE = os.getenv("PHYSIOFLOW_DATA_FILE", "data/data.json")

# Relational store (therapists, accounts)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///data/physioflow.db")

# Auth tokens
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# When true, therapist mutations require an authenticated admin
ENFORCE_ADMIN_GATE = os.getenv("ENFORCE_ADMIN_GATE", "false").lower() == "true"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
