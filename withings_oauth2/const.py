
from __future__ import annotations

OAUTH_AUTHORIZE_URL = "https://account.withings.com/oauth2_user/authorize2"

API_HOST = "https://wbsapi.withings.net/v2"

PATH_OAUTH2 = "/oauth2"
PATH_SIGNATURE = "/signature"
PATH_USER = "/user"
PATH_MEASURE = "/measure"
PATH_HEART = "/heart"
PATH_SLEEP = "/sleep"

SCOPE_PREFIX = "user."

ACTION_GET_NONCE = "getnonce"
ACTION_REQUEST_TOKEN = "requesttoken"
ACTION_GET_DEVICE = "getdevice"
ACTION_GET_GOALS = "getgoals"
ACTION_GET_MEAS = "getmeas"
ACTION_GET_ACTIVITY = "getactivity"
ACTION_GET_INTRADAY_ACTIVITY = "getintradayactivity"
ACTION_GET_WORKOUTS = "getworkouts"
ACTION_HEART_LIST = "list"
ACTION_SLEEP_SUMMARY = "getsummary"

GRANT_AUTHORIZATION_CODE = "authorization_code"
GRANT_REFRESH_TOKEN = "refresh_token"

# weight, height, temperature
DEFAULT_MEASTYPES = "1,4,12"
DEFAULT_MEAS_CATEGORY = 1
# measurement window is expressed in milliseconds
DEFAULT_MEAS_LOOKBACK_MS = 86_400_000
DEFAULT_LOOKBACK_DAYS = 30
