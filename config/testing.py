from .base import *  # noqa: F401,F403

DEBUG = False
TESTING = True

MAX_WORKERS = 4
STORE_TIMEOUT_SECONDS = 1.0

AUTO_INIT_DB = False
AUTO_SEED_DB = False
