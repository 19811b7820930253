from config.config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"
JWT_SECRET = "test-jwt-secret"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False

TRUST_TELEGRAM_ID = True
BOT_API_KEY = ""
