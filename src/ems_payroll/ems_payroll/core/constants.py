"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Payroll domain rules (not configurable per user)
REGULAR_HOURS_PER_DAY = 8.0
OVERTIME_MULTIPLIER = 1.5
MAX_HOURS_PER_DAY = 24.0

# Auth
JWT_ALGORITHM = "HS256"
DEFAULT_TOKEN_TTL_SECONDS = 24 * 60 * 60
BEARER_PREFIX = "Bearer "
MIN_PASSWORD_LENGTH = 6
MIN_USERNAME_LENGTH = 3

# Listing
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 200
