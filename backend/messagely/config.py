# messagely/config.py

import os
import warnings

# =========================
# DATABASE
# =========================

DB_USER = os.getenv("DB_USER", "messagely_user")
DB_PASS = os.getenv("DB_PASS", "messagely")
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = os.getenv("DB_PORT", "5432")
DB_NAME = os.getenv("DB_NAME", "messagely")

# A full URL (e.g. sqlite:///messagely.db) takes precedence over the DB_* parts
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)

# =========================
# AUTH
# =========================

SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE-ME-secret")
BCRYPT_WORK_FACTOR = int(os.getenv("BCRYPT_WORK_FACTOR", "12"))
LOGIN_RATE_LIMIT = os.getenv("LOGIN_RATE_LIMIT", "10/minute")

if "CHANGE-ME" in SECRET_KEY:
    warnings.warn("SECRET_KEY is not set, tokens are signed with a placeholder secret")

# =========================
# LOGGING
# =========================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
