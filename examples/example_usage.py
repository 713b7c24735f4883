"""Example: run one scanner batch through the service layer (no Flask).

Controllers are a thin layer; the decision logic lives in the engine/service.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.mac_attendance.mac_attendance.container import build_container
from src.mac_attendance.mac_attendance.main import configure_logging


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(settings.LOG_LEVEL)
    container = build_container(db_config=settings.DB_CONFIG, options={"MARK_WINDOW_MINUTES": settings.MARK_WINDOW_MINUTES})
    try:
        print(container.attendance_service.mark_attendance({"mac_addresses": ["aa:bb:cc:dd:ee:01", "AA:BB:CC:DD:EE:02"]}))
        print(container.attendance_service.get_recent_attendance())
    finally:
        container.close()


if __name__ == "__main__":
    main()
