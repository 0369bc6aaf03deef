"""Push provider adapters."""

from modules.push.providers.apns import ApnsProvider, build_apns_message
from modules.push.providers.base import PushProvider
from modules.push.providers.fcm import FcmProvider, build_fcm_message

__all__ = [
    "ApnsProvider",
    "FcmProvider",
    "PushProvider",
    "build_apns_message",
    "build_fcm_message",
]
