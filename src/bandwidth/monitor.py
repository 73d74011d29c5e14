"""Bandwidth monitoring pipeline for a single interface (read-only)."""

from typing import Optional

from ..snmp_client.client import SnmpClient
from ..utils.logger import get_logger, update_logger_device_context
from .exceptions import MonitorError, UtilizationConfigError
from .models import ResolvedInterface, TickResult
from .resolver import DEFAULT_PAGE_SIZE, InterfaceResolver
from .sampler import CounterSampler, compute_delta
from .utilization import DEFAULT_HISTORY_SIZE, HistoryBuffer, utilization

logger = get_logger(__name__)


class PortMonitor:
    """Resolves one interface at startup, then samples it once per tick.

    The owner calls ``tick()`` on its own schedule. Nothing here retries or
    swallows errors: a failed tick raises, and neither the history nor the
    delta baseline is touched.
    """

    def __init__(self, client: SnmpClient, token: str, interval_seconds: int = 1,
                 history_size: int = DEFAULT_HISTORY_SIZE, page_size: int = DEFAULT_PAGE_SIZE):
        if interval_seconds <= 0:
            raise UtilizationConfigError(f"sampling interval must be positive, got {interval_seconds}s")

        self.client = client
        self.token = token
        self.interval_seconds = interval_seconds
        self.resolver = InterfaceResolver(client, page_size=page_size)
        self.history = HistoryBuffer(history_size)

        self.interface: Optional[ResolvedInterface] = None
        self.sampler: Optional[CounterSampler] = None
        self.last_result: Optional[TickResult] = None
        self.last_error: Optional[MonitorError] = None
        self.tick_count: int = 0

    @property
    def started(self) -> bool:
        return self.sampler is not None

    async def start(self) -> ResolvedInterface:
        """Resolve the interface. Safe to call again; resolution runs once."""
        if self.interface is not None:
            return self.interface

        interface = await self.resolver.resolve(self.token)
        identity = interface.identity
        update_logger_device_context(logger, self.client.host, identity.name)

        if identity.speed_mbps <= 0:
            raise UtilizationConfigError(
                f"interface '{identity.name}' reports a link speed of {identity.speed_mbps} Mbps"
            )

        self.interface = interface
        self.sampler = CounterSampler(self.client, identity)
        logger.info(
            f"Resolved '{self.token}' to ifIndex {identity.index} ({identity.name}, "
            f"{identity.speed_mbps} Mbps) on {interface.sys_name or self.client.host}"
        )
        return interface

    async def tick(self) -> TickResult:
        """Sample once; on the first tick there is only a baseline."""
        if not self.started:
            raise MonitorError("monitor has not been started")

        try:
            sample = await self.sampler.fetch()
        except MonitorError as e:
            self.last_error = e
            logger.warning(f"Sampling failed: {e}")
            raise

        delta = compute_delta(sample, self.sampler.previous)
        result = TickResult(sample=sample, delta=delta)
        if delta is not None:
            result.utilization = utilization(
                delta, self.interval_seconds, self.interface.identity.speed_mbps
            )

        # Commit only once everything above succeeded
        self.sampler.commit(sample)
        if result.utilization is not None:
            self.history.append(result.utilization)
            if delta.has_wrap:
                logger.info(f"Counter wrap corrected for {', '.join(delta.wrapped)}")

        self.tick_count += 1
        self.last_result = result
        self.last_error = None
        if result.utilization is not None:
            logger.debug(
                f"tick {self.tick_count} at {sample.taken_at:%H:%M:%S}: rx={result.utilization.rx_percent:.2f}% "
                f"tx={result.utilization.tx_percent:.2f}%"
            )
        else:
            logger.debug(f"tick {self.tick_count} at {sample.taken_at:%H:%M:%S}: baseline sample")
        return result

    def rebaseline(self) -> None:
        """Drop only the delta baseline; history is kept.

        Needed whenever ticks were skipped on purpose (pause), since the
        formula assumes exactly one interval between samples.
        """
        if self.sampler is not None:
            self.sampler.reset()

    def reset(self) -> None:
        """Drop history and baseline; the next tick is a fresh baseline."""
        self.history.clear()
        if self.sampler is not None:
            self.sampler.reset()
        self.last_result = None
        self.tick_count = 0
