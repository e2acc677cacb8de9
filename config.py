"""
Configuration settings for the URL redirect service.
"""

import os
from typing import Any, Dict

# Data file holding the path -> url mappings (.yaml, .json or .db)
DATA_FILE = "data.yaml"

# Listener settings
HOST = "0.0.0.0"
PORT = 8080

# Use 302 (Found) or 307 (Temporary Redirect); both are temporary
# Mappings can change between restarts, so clients should not cache them
REDIRECT_TYPE = 302

# Logging settings
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


# Override settings with environment variables
def get_env_settings() -> Dict[str, Any]:
    """Get settings from URLSHORT_* environment variables"""
    env_settings = {}

    for key, value in globals().items():
        if key.isupper():  # Only consider uppercase variables as settings
            env_value = os.environ.get(f"URLSHORT_{key}")
            if env_value is not None:
                # Convert to appropriate type based on default value
                if isinstance(value, int):
                    env_settings[key] = int(env_value)
                else:
                    env_settings[key] = env_value

    return env_settings


def check_redirect_type(status_code: int) -> int:
    """Only temporary redirect statuses are allowed"""
    if status_code not in (302, 307):
        raise ValueError(f"REDIRECT_TYPE must be 302 or 307, got {status_code}")
    return status_code


# Update settings with environment variables
globals().update(get_env_settings())
check_redirect_type(REDIRECT_TYPE)
