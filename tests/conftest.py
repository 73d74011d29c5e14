"""Pytest fixtures for SNMP port viewer tests."""

import pytest
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

# Add the project root to the Python path
import sys
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.bandwidth.models import InterfaceIdentity
from src.snmp_client.oids import IF_NAME, SYS_NAME, IF_ALIAS, IF_HIGH_SPEED, indexed, oid_key
from src.bandwidth.sampler import counter_oids


def pytest_configure(config):
    """Register custom pytest marks."""
    config.addinivalue_line(
        "markers", "unit: Unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests"
    )
    config.addinivalue_line(
        "markers", "real_device: Tests that require a real SNMP agent"
    )


def pytest_collection_modifyitems(config, items):
    """Skip real-agent tests unless PV_TEST_AGENT is set."""
    if os.getenv('PV_TEST_AGENT'):
        return
    skip_real = pytest.mark.skip(reason="set PV_TEST_AGENT to run against a real SNMP agent")
    for item in items:
        if "real_device" in item.keywords:
            item.add_marker(skip_real)


class FakeSnmpClient:
    """In-memory agent: a dict of OID -> value with the SnmpClient async surface.

    ``counter_readings`` is consumed one entry per counter GET; an entry that
    is an exception instance is raised instead of answered.
    """

    def __init__(self, values: Dict[str, Any] = None, host: str = "192.0.2.1",
                 counter_readings: List[Any] = None, counter_index: int = None):
        self.host = host
        self.values = dict(values or {})
        self.counter_readings = list(counter_readings or [])
        self.counter_oids = counter_oids(counter_index) if counter_index else None
        self.get_requests: List[List[str]] = []
        self.walk_requests: List[str] = []
        self.pages_served = 0
        self.get_error: Optional[Exception] = None
        self.walk_error: Optional[Exception] = None
        self.closed = False

    async def get(self, oids):
        oids = list(oids)
        self.get_requests.append(oids)
        if self.get_error is not None:
            raise self.get_error

        if self.counter_oids and oids == self.counter_oids:
            reading = self.counter_readings.pop(0)
            if isinstance(reading, Exception):
                raise reading
            return dict(zip(oids, reading))

        return {oid: self.values.get(oid) for oid in oids}

    async def walk_pages(self, base_oid, page_size=10):
        self.walk_requests.append(base_oid)
        rows = sorted(
            ((oid, value) for oid, value in self.values.items() if oid.startswith(base_oid + ".")),
            key=lambda row: oid_key(row[0]),
        )
        for start in range(0, len(rows), page_size):
            if self.walk_error is not None:
                raise self.walk_error
            self.pages_served += 1
            yield rows[start:start + page_size]

    def close(self):
        self.closed = True


def build_agent_values(names: Dict[int, str], sys_name: str = "core-sw-01",
                       aliases: Dict[int, str] = None, speeds: Dict[int, int] = None) -> Dict[str, Any]:
    """OID table for a switch with the given ifName entries."""
    aliases = aliases or {}
    speeds = speeds or {}
    values = {SYS_NAME: sys_name}
    for index, name in names.items():
        values[indexed(IF_NAME, index)] = name
        values[indexed(IF_ALIAS, index)] = aliases.get(index, f"uplink {index}")
        values[indexed(IF_HIGH_SPEED, index)] = speeds.get(index, 1000)
    return values


@pytest.fixture
def agent_values():
    """Fixture providing a small switch ifName table."""
    return build_agent_values({
        1: "GigabitEthernet1/0/1",
        2: "GigabitEthernet1/0/2",
        3: "Vlan1",
        14: "ge-0/0/14",
    })


@pytest.fixture
def fake_client(agent_values):
    """Fixture providing an in-memory SNMP client."""
    return FakeSnmpClient(agent_values)


@pytest.fixture
def identity():
    """Fixture providing a resolved 1 Gbps interface."""
    return InterfaceIdentity(index=14, name="ge-0/0/14", alias="to core", speed_mbps=1000)


@pytest.fixture
def counter_client(agent_values):
    """Fixture providing an agent answering counter GETs for ifIndex 14."""
    return FakeSnmpClient(agent_values, counter_index=14)
