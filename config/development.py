import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# HS256 signing key for API tokens (at least 32 bytes)
JWT_SECRET = os.getenv("JWT_SECRET", "dev-jwt-secret-change-me-0123456789abcdef")
JWT_EXPIRATION_SECONDS = int(os.getenv("JWT_EXPIRATION_SECONDS", str(24 * 60 * 60)))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "ems_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Fraction of gross pay withheld, 0 disables deductions
PAYROLL_DEDUCTION_RATE = float(os.getenv("PAYROLL_DEDUCTION_RATE", "0"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
