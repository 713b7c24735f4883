import os


def env_bool(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "iot_project"),
}
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))
DB_CONNECT_TIMEOUT = int(os.getenv("DB_CONNECT_TIMEOUT", "5"))

# Attendance rules
MARK_WINDOW_MINUTES = int(os.getenv("MARK_WINDOW_MINUTES", "30"))
RECENT_WINDOW_MINUTES = int(os.getenv("RECENT_WINDOW_MINUTES", "60"))
STORE_TIMEOUT_SECONDS = float(os.getenv("STORE_TIMEOUT_SECONDS", "5"))
MAX_WORKERS = int(os.getenv("MAX_WORKERS", "8"))
# Serialize check-then-insert per student (row lock) instead of two round trips.
MARK_GUARD_ENABLED = env_bool("MARK_GUARD_ENABLED")
DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "Asia/Kolkata")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
