"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

USERS_KEY = "hrms_users"
ATTENDANCE_KEY = "hrms_attendance"
TIMEOFF_KEY = "hrms_timeoff"
SESSION_KEY = "hrms_current_session"

LOGIN_ID_PREFIX = "OI"
DEFAULT_EMPLOYEE_PASSWORD = "Odoo@123"
PASSWORD_MIN_LENGTH = 8
PASSWORD_SPECIAL_CHARS = '!@#$%^&*(),.?":{}|<>'

DEFAULT_PAID_ALLOCATION_DAYS = 24
DEFAULT_SICK_ALLOCATION_DAYS = 7
DEFAULT_STANDARD_SHIFT_HOURS = 9
DEFAULT_STANDARD_ALLOWANCE = 4167
DEFAULT_WORKING_DAYS = 22

PROFESSIONAL_TAX = 200
OTP_LENGTH = 6
DEFAULT_OTP_TTL_MINUTES = 10
