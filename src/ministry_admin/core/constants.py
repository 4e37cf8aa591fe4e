"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_NOTIFICATION_LIMIT = 50
DEFAULT_EXPENSE_HISTORY_LIMIT = 20
DEFAULT_SCHEDULE_LIMIT = 20
DEFAULT_RECENT_DUTIES_LIMIT = 10
SCHEDULE_LOOKBACK_DAYS = 30
UPCOMING_EVENTS_LIMIT = 5

CALENDAR_CELLS = 42
PASSWORD_MIN_LENGTH = 6
MEMBER_EMAIL_DOMAIN = "ministry.local"

JUNIOR_MIN_YEARS = 3
SENIOR_MIN_YEARS = 5

ADMIN_CODE_PREFIX = "ADM"
DEFAULT_ADMIN_POSITION = "Ministry Administrator"
DEFAULT_ADMIN_PERMISSIONS = (
    "manage_members",
    "manage_events",
    "manage_finances",
    "manage_attendance",
    "view_reports",
    "manage_settings",
)

REGISTRATION_DISABLED_KEY = "registration_disabled"
UNASSIGNED_GROUP = "Not Assigned"
