"""Settings shared by every environment, read from the process environment.

Environment modules (development / production / testing) import these names
and override what differs.
"""
import os


def env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Signing key and lifetime of the x-auth-token issued at login.
JWT_SECRET = os.getenv("JWT_SECRET", SECRET_KEY)
JWT_EXPIRES_HOURS = int(os.getenv("JWT_EXPIRES_HOURS", "5"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_portal"),
}

# Check-ins strictly after this local time count as late on the dashboard.
WORK_START = os.getenv("WORK_START", "09:00")
STATS_WINDOW_DAYS = int(os.getenv("STATS_WINDOW_DAYS", "7"))

# Check-in/out and bot lookups are keyed only by the Telegram id. With this
# flag on, anyone who can reach the API can act for any Telegram id; turn it
# off to require BOT_API_KEY in the x-bot-key header.
TRUST_TELEGRAM_ID = env_flag("TRUST_TELEGRAM_ID", "1")
BOT_API_KEY = os.getenv("BOT_API_KEY", "")

TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "")
API_URL = os.getenv("API_URL", "http://localhost:5000/api")
API_TIMEOUT_SECONDS = float(os.getenv("API_TIMEOUT_SECONDS", "10"))

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEFAULT_ADMIN = {
    "name": os.getenv("ADMIN_NAME", "Admin User"),
    "email": os.getenv("ADMIN_EMAIL", "admin@example.com"),
    "password": os.getenv("ADMIN_PASSWORD", "admin123"),
}

DEBUG = False
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
