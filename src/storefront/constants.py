"""
Application constants and default values.
"""

DEFAULT_API_URL = "http://localhost:5000"
DEFAULT_TIMEOUT_SECONDS = 30
MAX_TIMEOUT_SECONDS = 300
DEFAULT_USER_AGENT = "storefront-client"

DEFAULT_LOG_FILE_SIZE_BYTES = 10 * 1024 * 1024
MIN_LOG_FILE_SIZE_BYTES = 1024
DEFAULT_LOG_BACKUP_COUNT = 5

CONFIG_DIR_NAME = "storefront"
CONFIG_FILE_NAME = "config.toml"
SESSION_FILE_NAME = "session.json"
ENCRYPTION_KEY_FILE_NAME = "session.key"


class Endpoints:
    """API paths used by the client core."""

    LOGIN = "/api/auth/login"
    REGISTER = "/api/auth/register"
    REFRESH = "/api/auth/refresh"
    UPLOADS_PREFIX = "/uploads"


class RefreshDefaults:
    """Bounded backoff for transient failures of the refresh call."""

    MAX_ATTEMPTS = 3
    BASE_DELAY_SECONDS = 0.5
    MAX_DELAY_SECONDS = 5.0


# Ordered delivery steps used for order tracking
TRACKING_STEPS = (
    ("pending", "Ordered"),
    ("processing", "Order Ready"),
    ("shipped", "Shipped"),
    ("out_for_delivery", "Out for Delivery"),
    ("delivered", "Delivered"),
)
