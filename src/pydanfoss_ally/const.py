"""Constants for pydanfoss_ally."""

# Base URL for the Danfoss API
BASE_URL = "https://api.danfoss.com"

# OAuth2 endpoints
TOKEN_ENDPOINT = "/oauth2/token"
GRANT_TYPE = "client_credentials"

# API Endpoints
DEVICES_ENDPOINT = "/ally/devices"

# Environment variables holding the client credentials
ENV_API_KEY = "DANFOSS_API_KEY"
ENV_API_SECRET = "DANFOSS_API_SECRET"

# Seconds between two polling cycles
DEFAULT_POLLING_INTERVAL = 30
# Upper bound in seconds for a single HTTP call
DEFAULT_REQUEST_TIMEOUT = 10

# expires_in of the placeholder token held before the first renewal
INITIAL_EXPIRES_IN = "0"

# Status codes reporting a current room temperature
TEMPERATURE_STATUS_CODES = ("va_temperature", "temp_current")
