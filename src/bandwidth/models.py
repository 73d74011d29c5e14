"""
Data models for interface bandwidth monitoring.

Contains:
- InterfaceIdentity: A resolved interface (index, name, alias, link speed)
- ResolvedInterface: Identity plus the device's sysName, for display
- CounterSample: One snapshot of the six traffic counters
- CounterDelta: Per-tick counter differences
- UtilizationSample: Rx/Tx percent of link capacity for one tick
- TickResult: Everything one sampling tick produced
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Optional, Tuple

COUNTER_BITS = 64
COUNTER_MODULUS = 2 ** COUNTER_BITS
COUNTER_MAX = COUNTER_MODULUS - 1

# Counter field order, matching the order of the GET request
COUNTER_FIELDS = (
    "in_octets",
    "in_discards",
    "in_errors",
    "out_octets",
    "out_discards",
    "out_errors",
)


@dataclass(frozen=True)
class InterfaceIdentity:
    """A network interface resolved on the agent. Never changes for a session."""
    index: int
    name: str
    alias: str = ""
    speed_mbps: int = 0

    def __post_init__(self):
        if self.index <= 0:
            raise ValueError(f"Interface index must be positive, got {self.index}")
        if self.speed_mbps < 0:
            raise ValueError(f"Link speed cannot be negative, got {self.speed_mbps}")


@dataclass(frozen=True)
class ResolvedInterface:
    """Result of interface resolution: identity plus device-level text."""
    identity: InterfaceIdentity
    sys_name: str = ""

    @property
    def index(self) -> int:
        return self.identity.index


@dataclass(frozen=True)
class CounterSample:
    """Six monotonically non-decreasing unsigned 64-bit counters."""
    in_octets: int
    in_discards: int
    in_errors: int
    out_octets: int
    out_discards: int
    out_errors: int
    taken_at: datetime = field(default_factory=datetime.now, compare=False)

    def __post_init__(self):
        for name in COUNTER_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
            if not 0 <= value <= COUNTER_MAX:
                raise ValueError(f"{name}={value} is outside the unsigned 64-bit range")

    def values(self) -> Tuple[int, ...]:
        return tuple(getattr(self, name) for name in COUNTER_FIELDS)


@dataclass(frozen=True)
class CounterDelta:
    """Difference between two consecutive samples, wraparound-corrected."""
    in_octets: int
    in_discards: int
    in_errors: int
    out_octets: int
    out_discards: int
    out_errors: int
    # Names of counters that wrapped during the interval
    wrapped: Tuple[str, ...] = ()

    @property
    def has_wrap(self) -> bool:
        return bool(self.wrapped)

    def as_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name in COUNTER_FIELDS}


@dataclass(frozen=True)
class UtilizationSample:
    """Rx/Tx utilization in percent of link speed. Not clamped to 100."""
    rx_percent: float
    tx_percent: float


@dataclass
class TickResult:
    """Outcome of one successful sampling tick.

    On the first tick there is no baseline yet, so ``delta`` and
    ``utilization`` are both None (distinct from a real zero).
    """
    sample: CounterSample
    delta: Optional[CounterDelta] = None
    utilization: Optional[UtilizationSample] = None

    @property
    def is_baseline(self) -> bool:
        return self.delta is None
