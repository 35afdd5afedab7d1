"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

# Keys of the persisted client session
TOKEN_KEY = "authToken"
USER_INFO_KEY = "userInfo"
REMEMBERED_STAFF_ID_KEY = "rememberedStaffId"

API_PREFIX = "/api"

DEFAULT_SESSION_DAYS = 7
DEFAULT_SUCCESS_BANNER_SECONDS = 5
DEFAULT_APPROVER = "HR Manager"

LOGIN_PATH = "/login"
LOGOUT_PATH = "/logout"
UNAUTHORIZED_PATH = "/unauthorized"
DASHBOARD_PATH = "/dashboard"

CONNECTION_ERROR_MESSAGE = "Unable to connect to server, please check if backend is running"
