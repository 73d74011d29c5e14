"""Utilization percentage and the rolling history feeding the charts."""

from collections import deque
from typing import Iterable, List, Optional

from .exceptions import UtilizationConfigError
from .models import CounterDelta, UtilizationSample

BITS_PER_OCTET = 8
BPS_PER_MBPS = 1_000_000

DEFAULT_HISTORY_SIZE = 120


def percent_of_capacity(delta_octets: int, interval_seconds: int, speed_mbps: int) -> float:
    """(octets * 8 * 100) / (Mbps * seconds * 1e6), computed from exact integers."""
    if speed_mbps <= 0:
        raise UtilizationConfigError(f"link speed must be positive, got {speed_mbps} Mbps")
    if interval_seconds <= 0:
        raise UtilizationConfigError(f"sampling interval must be positive, got {interval_seconds}s")
    return (delta_octets * BITS_PER_OCTET * 100) / (speed_mbps * interval_seconds * BPS_PER_MBPS)


def utilization(delta: CounterDelta, interval_seconds: int, speed_mbps: int) -> UtilizationSample:
    """Rx/Tx utilization over a nominal interval."""
    return UtilizationSample(
        rx_percent=percent_of_capacity(delta.in_octets, interval_seconds, speed_mbps),
        tx_percent=percent_of_capacity(delta.out_octets, interval_seconds, speed_mbps),
    )


class HistoryBuffer:
    """Fixed-capacity FIFO of utilization samples; the oldest drops out first."""

    def __init__(self, capacity: int = DEFAULT_HISTORY_SIZE, samples: Iterable[UtilizationSample] = ()):
        if capacity <= 0:
            raise ValueError(f"history capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._samples = deque(samples, maxlen=capacity)

    def append(self, sample: UtilizationSample) -> None:
        self._samples.append(sample)

    def snapshot(self) -> List[UtilizationSample]:
        """Chronological copy, oldest first."""
        return list(self._samples)

    def rx_series(self) -> List[float]:
        return [s.rx_percent for s in self._samples]

    def tx_series(self) -> List[float]:
        return [s.tx_percent for s in self._samples]

    def latest(self) -> Optional[UtilizationSample]:
        return self._samples[-1] if self._samples else None

    def clear(self) -> None:
        self._samples.clear()

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self):
        return iter(self.snapshot())
