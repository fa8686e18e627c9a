import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

JWT_SECRET = os.getenv("JWT_SECRET", "")
JWT_EXPIRATION_SECONDS = int(os.getenv("JWT_EXPIRATION_SECONDS", str(24 * 60 * 60)))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "ems_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

PAYROLL_DEDUCTION_RATE = float(os.getenv("PAYROLL_DEDUCTION_RATE", "0"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
