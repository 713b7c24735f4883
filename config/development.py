import os

from .base import *  # noqa: F401,F403
from .base import env_bool

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_bool("AUTO_INIT_DB", "1")
# Optional: also seed demo students on startup
AUTO_SEED_DB = env_bool("AUTO_SEED_DB", "0")
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
