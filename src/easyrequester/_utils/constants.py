# Environment variables
ENV_TIMEOUT = "EASYREQUESTER_TIMEOUT"
ENV_USER_AGENT = "EASYREQUESTER_USER_AGENT"
ENV_MAX_WORKERS = "EASYREQUESTER_MAX_WORKERS"

# Headers
HEADER_USER_AGENT = "User-Agent"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_COOKIE = "Cookie"

# Content types
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"
CONTENT_TYPE_OCTET_STREAM = "application/octet-stream"
CONTENT_TYPE_TEXT = "text/plain; charset=utf-8"
CONTENT_TYPE_MULTIPART = "multipart/form-data"

# Defaults
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/129.0.0.0 Safari/537.36"
)
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_WORKERS = 8
