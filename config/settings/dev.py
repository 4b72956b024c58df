"""Development settings.

Extends the base settings with debug enabled and human-readable logs. Do not
use these settings in production!
"""

from .base import *  # noqa: F401,F403
from .base import LOGGING

DEBUG = True

ALLOWED_HOSTS = ["*"]

LOGGING["handlers"]["console"]["formatter"] = "console"
LOGGING["loggers"]["drones"]["level"] = "DEBUG"
