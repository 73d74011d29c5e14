"""Interface resolution, counter sampling and utilization for SNMP agents."""

from .monitor import PortMonitor
from .resolver import InterfaceResolver
from .sampler import CounterSampler, compute_delta, counter_delta
from .utilization import HistoryBuffer, utilization

__all__ = [
    'PortMonitor',
    'InterfaceResolver',
    'CounterSampler',
    'compute_delta',
    'counter_delta',
    'HistoryBuffer',
    'utilization',
]
