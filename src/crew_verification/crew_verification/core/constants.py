"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

CLOCK_FORMAT = "%H:%M"

DEFAULT_FETCH_WORKERS = 3
DEFAULT_REQUEST_LIST_LIMIT = 200
DEFAULT_ADMIN_LIST_LIMIT = 500

UNKNOWN_NAME = "Unknown"
NO_ENTRY_STATUS = "no_entry"
ADDED_STATUS = "added"
