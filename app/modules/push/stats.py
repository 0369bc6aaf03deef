"""Per-destination delivery statistics and forwarding circuit breaker.

Each destination (see DestinationKey) gets one StatsEntry for the lifetime
of the process. Entries count direct deliveries and forwards, and carry a
`disabled_until` timestamp: once the upstream relay answers a forward with
422, forwarding for that destination is suspended for the cooldown.

Breaker states:
- ENABLED: `disabled_until` unset, forwards pass through
- DISABLED: `disabled_until` in the future, forwards are refused locally
- expired: `disabled_until` in the past; the next reader clears it with a
  compare-and-set and the forward goes through (no half-open probing)

The registry is the only state shared between requests. Entries are
inserted with `dict.setdefault` and never removed; counters and the
breaker timestamp are mutated through per-entry atomic primitives, so
requests for different destinations never contend.
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Generic, List, Optional, TypeVar

from infrastructure.logging import get_module_logger
from modules.push.models import DestinationKey

logger = get_module_logger()

DEFAULT_DISABLE_SECONDS = 3600

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AtomicCounter:
    """Monotonic counter safe for concurrent increments."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        return self._value


class AtomicReference(Generic[T]):
    """Reference cell with identity-based compare-and-set."""

    def __init__(self, value: T) -> None:
        self._value = value
        self._lock = threading.Lock()

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        with self._lock:
            self._value = value

    def compare_and_set(self, expected: T, new: T) -> bool:
        """Store `new` only if the current value is `expected` (by identity)."""
        with self._lock:
            if self._value is not expected:
                return False
            self._value = new
            return True


@dataclass
class StatsEntry:
    """Counters and breaker state for one destination.

    Attributes:
        key: The destination this entry tracks
        direct_apn: Direct APNs delivery attempts
        direct_fcm: Direct FCM delivery attempts
        forwarded: Requests routed to the upstream relay
        mismatch_forwarded: Direct FCM attempts forwarded after a sender mismatch
        disabled_until: End of the forwarding cooldown, None when enabled
    """

    key: DestinationKey
    direct_apn: AtomicCounter = field(default_factory=AtomicCounter)
    direct_fcm: AtomicCounter = field(default_factory=AtomicCounter)
    forwarded: AtomicCounter = field(default_factory=AtomicCounter)
    mismatch_forwarded: AtomicCounter = field(default_factory=AtomicCounter)
    disabled_until: AtomicReference[Optional[datetime]] = field(
        default_factory=lambda: AtomicReference(None)
    )


class StatsRegistry:
    """Process-lifetime table of StatsEntry objects keyed by destination.

    Created by the application lifespan and injected into the dispatcher;
    tests build their own instance.

    Args:
        disable_seconds: Forwarding cooldown after an upstream rejection
        clock: Returns the current aware datetime (defaults to UTC now)
    """

    def __init__(
        self,
        disable_seconds: int = DEFAULT_DISABLE_SECONDS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.disable_delay = timedelta(seconds=disable_seconds)
        self._clock = clock or _utcnow
        self._entries: Dict[DestinationKey, StatsEntry] = {}
        self.started_at = self._clock()

    def get_or_create(self, key: DestinationKey) -> StatsEntry:
        """Return the entry for `key`, inserting a fresh one if absent.

        `setdefault` is a single insert-if-absent step, so concurrent first
        requests for the same key all end up with the same entry.
        """
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries.setdefault(key, StatsEntry(key=key))
        return entry

    def is_disabled(self, entry: StatsEntry) -> bool:
        """Check whether forwarding is suspended for this entry.

        An expired cooldown is cleared here. If another caller changed the
        timestamp in between (cleared it, or disabled again), the CAS fails
        and the current value decides.
        """
        until = entry.disabled_until.get()
        if until is None:
            return False

        now = self._clock()
        if now < until:
            return True

        if entry.disabled_until.compare_and_set(until, None):
            logger.info(
                "forwarding_reenabled",
                unique_id=entry.key.unique_id,
                client_ip=entry.key.client_ip,
                host=entry.key.host,
            )
            return False

        current = entry.disabled_until.get()
        return current is not None and now < current

    def disable(self, entry: StatsEntry) -> datetime:
        """Suspend forwarding for the full cooldown, replacing any running one."""
        until = self._clock() + self.disable_delay
        entry.disabled_until.set(until)
        return until

    def record_direct_apn(self, entry: StatsEntry) -> None:
        entry.direct_apn.increment()

    def record_direct_fcm(self, entry: StatsEntry) -> None:
        entry.direct_fcm.increment()

    def record_forwarded(self, entry: StatsEntry) -> None:
        entry.forwarded.increment()

    def record_mismatch_forwarded(self, entry: StatsEntry) -> None:
        entry.mismatch_forwarded.increment()

    def direct_deliveries(self, entry: StatsEntry) -> int:
        """Direct attempts that were not handed over to the relay."""
        return (
            entry.direct_apn.value
            + entry.direct_fcm.value
            - entry.mismatch_forwarded.value
        )

    def snapshot(self) -> List[StatsEntry]:
        """All entries, in insertion order."""
        return list(self._entries.values())

    def uptime(self) -> timedelta:
        return self._clock() - self.started_at

    def __len__(self) -> int:
        return len(self._entries)
