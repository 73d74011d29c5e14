"""Pytest tests for the per-interface monitoring pipeline."""

import asyncio
import pytest

from src.bandwidth.exceptions import (
    InterfaceNotFoundError,
    MonitorError,
    SamplingError,
    UtilizationConfigError,
)
from src.bandwidth.monitor import PortMonitor
from src.snmp_client.exceptions import TransportError

from conftest import FakeSnmpClient, build_agent_values

GIGABIT_TENTH = 12_500_000  # octets per second at 10% of 1000 Mbps


def run_ticks(monitor, count):
    async def _run():
        await monitor.start()
        results = []
        for _ in range(count):
            results.append(await monitor.tick())
        return results
    return asyncio.run(_run())


class TestPortMonitor:
    """Test cases for PortMonitor."""

    @pytest.mark.unit
    def test_first_tick_is_baseline(self, counter_client):
        counter_client.counter_readings = [(0, 0, 0, 0, 0, 0)]
        monitor = PortMonitor(counter_client, "ge-0/0/14")

        result, = run_ticks(monitor, 1)

        assert result.is_baseline
        assert result.delta is None
        assert result.utilization is None
        assert len(monitor.history) == 0
        assert monitor.tick_count == 1

    @pytest.mark.unit
    def test_second_tick_utilization(self, counter_client):
        counter_client.counter_readings = [
            (1000, 0, 0, 1000, 0, 0),
            (1000 + GIGABIT_TENTH, 1, 0, 1000 + 2 * GIGABIT_TENTH, 0, 3),
        ]
        monitor = PortMonitor(counter_client, ".14")

        _, result = run_ticks(monitor, 2)

        assert result.utilization.rx_percent == 10.0
        assert result.utilization.tx_percent == 20.0
        assert result.delta.in_discards == 1
        assert result.delta.out_errors == 3
        assert monitor.history.rx_series() == [10.0]
        assert monitor.last_result is result

    @pytest.mark.unit
    def test_interval_scales_utilization(self, counter_client):
        counter_client.counter_readings = [
            (0, 0, 0, 0, 0, 0),
            (5 * GIGABIT_TENTH, 0, 0, 0, 0, 0),
        ]
        monitor = PortMonitor(counter_client, ".14", interval_seconds=5)

        _, result = run_ticks(monitor, 2)

        assert result.utilization.rx_percent == 10.0

    @pytest.mark.unit
    def test_wrap_is_corrected(self, counter_client):
        top = 2 ** 64 - 1000
        counter_client.counter_readings = [
            (top, 0, 0, 0, 0, 0),
            (GIGABIT_TENTH - 1000, 0, 0, 0, 0, 0),
        ]
        monitor = PortMonitor(counter_client, ".14")

        _, result = run_ticks(monitor, 2)

        assert result.delta.in_octets == GIGABIT_TENTH
        assert result.delta.wrapped == ('in_octets',)
        assert result.utilization.rx_percent == 10.0

    @pytest.mark.unit
    def test_failed_tick_leaves_state_untouched(self, counter_client):
        counter_client.counter_readings = [
            (0, 0, 0, 0, 0, 0),
            (GIGABIT_TENTH, 0, 0, 0, 0, 0),
            TransportError("No SNMP response received before timeout"),
            (3 * GIGABIT_TENTH, 0, 0, 0, 0, 0),
        ]
        monitor = PortMonitor(counter_client, ".14")

        async def _run():
            await monitor.start()
            await monitor.tick()
            await monitor.tick()
            baseline = monitor.sampler.previous
            history = monitor.history.snapshot()

            with pytest.raises(SamplingError):
                await monitor.tick()

            assert monitor.sampler.previous is baseline
            assert monitor.history.snapshot() == history
            assert isinstance(monitor.last_error, SamplingError)
            return await monitor.tick()

        result = asyncio.run(_run())

        # The delta after a failure spans both intervals
        assert result.delta.in_octets == 2 * GIGABIT_TENTH
        assert monitor.last_error is None
        assert monitor.history.rx_series() == [10.0, 20.0]

    @pytest.mark.unit
    def test_zero_speed_rejected_at_start(self):
        client = FakeSnmpClient(build_agent_values({14: "ge-0/0/14"}, speeds={14: 0}), counter_index=14)
        monitor = PortMonitor(client, ".14")

        with pytest.raises(UtilizationConfigError):
            asyncio.run(monitor.start())
        assert not monitor.started

    @pytest.mark.unit
    def test_zero_interval_rejected(self, counter_client):
        with pytest.raises(UtilizationConfigError):
            PortMonitor(counter_client, ".14", interval_seconds=0)

    @pytest.mark.unit
    def test_tick_before_start(self, counter_client):
        monitor = PortMonitor(counter_client, ".14")
        with pytest.raises(MonitorError):
            asyncio.run(monitor.tick())

    @pytest.mark.unit
    def test_resolution_error_propagates(self, counter_client):
        monitor = PortMonitor(counter_client, "xe-1/1/1")
        with pytest.raises(InterfaceNotFoundError):
            asyncio.run(monitor.start())

    @pytest.mark.unit
    def test_start_resolves_once(self, counter_client):
        monitor = PortMonitor(counter_client, "ge-0/0/14")

        async def _run():
            first = await monitor.start()
            second = await monitor.start()
            return first, second

        first, second = asyncio.run(_run())

        assert first is second
        assert len(counter_client.walk_requests) == 1

    @pytest.mark.unit
    def test_reset(self, counter_client):
        counter_client.counter_readings = [
            (0, 0, 0, 0, 0, 0),
            (GIGABIT_TENTH, 0, 0, 0, 0, 0),
            (2 * GIGABIT_TENTH, 0, 0, 0, 0, 0),
        ]
        monitor = PortMonitor(counter_client, ".14")

        async def _run():
            await monitor.start()
            await monitor.tick()
            await monitor.tick()
            monitor.reset()
            return await monitor.tick()

        result = asyncio.run(_run())

        assert result.is_baseline
        assert len(monitor.history) == 0
        assert monitor.tick_count == 1

    @pytest.mark.unit
    def test_rebaseline_keeps_history(self, counter_client):
        # Samples 2 and 3 are nine intervals apart
        counter_client.counter_readings = [
            (0, 0, 0, 0, 0, 0),
            (GIGABIT_TENTH, 0, 0, 0, 0, 0),
            (10 * GIGABIT_TENTH, 0, 0, 0, 0, 0),
            (11 * GIGABIT_TENTH, 0, 0, 0, 0, 0),
        ]
        monitor = PortMonitor(counter_client, ".14")

        async def _run():
            await monitor.start()
            await monitor.tick()
            await monitor.tick()
            monitor.rebaseline()
            after_gap = await monitor.tick()
            return after_gap, await monitor.tick()

        after_gap, result = asyncio.run(_run())

        assert after_gap.is_baseline
        assert result.utilization.rx_percent == 10.0
        assert monitor.history.rx_series() == [10.0, 10.0]
        assert monitor.tick_count == 4

    @pytest.mark.unit
    def test_history_capacity(self, counter_client):
        counter_client.counter_readings = [(i, 0, 0, 0, 0, 0) for i in range(6)]
        monitor = PortMonitor(counter_client, ".14", history_size=3)

        run_ticks(monitor, 6)

        assert len(monitor.history) == 3
