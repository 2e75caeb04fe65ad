import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "ems_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Payroll month model
PAYROLL_WORKING_DAYS = int(os.getenv("PAYROLL_WORKING_DAYS", "26"))
PAYROLL_HOURS_PER_DAY = int(os.getenv("PAYROLL_HOURS_PER_DAY", "8"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed the leave type catalog on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))
