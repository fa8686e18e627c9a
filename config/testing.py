import os

SECRET_KEY = "test-secret"

JWT_SECRET = "test-jwt-secret-0123456789abcdef0123456789"
JWT_EXPIRATION_SECONDS = 3600

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "ems_test_db"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

PAYROLL_DEDUCTION_RATE = 0.0

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
