import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "crew_verification"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()

# Apply database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Also load database/seed.sql
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Threads used to fetch assignments and time clock entries side by side
FETCH_WORKERS = int(os.getenv("FETCH_WORKERS", "3"))
# Let a clock-out earlier than clock-in roll over to the next day
ALLOW_OVERNIGHT_SHIFTS = bool(int(os.getenv("ALLOW_OVERNIGHT_SHIFTS", "0")))
