"""Integration settings __init__ - exports all integration settings."""

from infrastructure.configuration.integrations.apns import ApnsSettings
from infrastructure.configuration.integrations.fcm import FcmSettings

__all__ = [
    "ApnsSettings",
    "FcmSettings",
]
