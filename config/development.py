from config.config import *  # noqa: F401,F403
from config.config import env_flag

DEBUG = env_flag("DEBUG", "1")
LOG_LEVEL = "DEBUG" if DEBUG else LOG_LEVEL  # noqa: F405

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also create the default admin on startup
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
