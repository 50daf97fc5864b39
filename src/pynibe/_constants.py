"""Internal constants shared across the library."""

import uuid

PLUGIN_NAME = "homebridge-nibe"

# Fixed namespace for UUIDv5 identities. Changing it renames every entity.
IDENTITY_NAMESPACE = uuid.UUID("6f1c5f3e-8a43-5b6e-9d6a-2a1f0c7e4b90")

DEFAULT_LOCALE = "en"
DEFAULT_POLL_INTERVAL: float = 60.0
DEFAULT_RESOLVE_TIMEOUT: float = 10.0

# ------------------------------------------------------------------
# Service-info categories and parameter keys
# ------------------------------------------------------------------

SYSTEM_INFO_CATEGORY = "SYSTEM_INFO"

PARAM_COUNTRY = "COUNTRY"
PARAM_PRODUCT = "PRODUCT"
PARAM_SERIAL_NUMBER = "SERIAL_NUMBER"

MANUFACTURER = "NIBE"
