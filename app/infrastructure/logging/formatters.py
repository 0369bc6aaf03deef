"""structlog processors used by the production pipeline."""

from typing import Any, Callable, Dict, FrozenSet, Optional

EventDict = Dict[str, Any]
Processor = Callable[[Any, str, EventDict], EventDict]

REDACTED = "***REDACTED***"

# Substrings of event keys whose values are never written out. "token"
# covers device tokens, which are enough to reach a user's phone.
SENSITIVE_PATTERNS: FrozenSet[str] = frozenset(
    {
        "token",
        "authorization",
        "bearer",
        "credential",
        "private_key",
        "password",
        "secret",
        "api_key",
        "apikey",
        "cookie",
        "jwt",
    }
)


def mask_sensitive_data(
    mask_value: str = REDACTED,
    additional_patterns: Optional[FrozenSet[str]] = None,
) -> Processor:
    """Replace values of sensitive keys (case-insensitive substring match).

    None values are left as is so a missing field stays visible.
    """
    patterns = SENSITIVE_PATTERNS | (additional_patterns or frozenset())

    def is_sensitive(key: str) -> bool:
        key = key.lower()
        return any(pattern in key for pattern in patterns)

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        return {
            key: mask_value if value is not None and is_sensitive(key) else value
            for key, value in event_dict.items()
        }

    return processor


def truncate_large_values(max_length: int = 500) -> Processor:
    """Cut string values longer than `max_length` (upstream bodies, raw requests)."""

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    f"{value[:max_length]}...[truncated, {len(value)} chars total]"
                )
        return event_dict

    return processor


def add_environment_info(environment: str) -> Processor:
    """Stamp every entry with the deployment environment."""

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict["environment"] = environment
        return event_dict

    return processor
