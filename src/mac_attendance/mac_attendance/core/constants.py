"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_MARK_WINDOW_MINUTES = 30
DEFAULT_RECENT_WINDOW_MINUTES = 60
DEFAULT_STORE_TIMEOUT_SECONDS = 5.0
DEFAULT_MAX_WORKERS = 8
DEFAULT_DISPLAY_TIMEZONE = "Asia/Kolkata"

INVALID_BODY_MESSAGE = 'Invalid request body. Expecting { "mac_addresses": Array }'
EMPTY_BATCH_MESSAGE = "no attendance marked"
NOTHING_VALID_MESSAGE = "no valid mac addresses, no attendance marked"
BATCH_DONE_MESSAGE = "Attendance processing complete."
READ_FAILED_MESSAGE = "Error fetching attendance data"
