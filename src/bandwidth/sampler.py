"""Per-tick retrieval of interface counters and delta computation."""

from typing import List, Optional, Tuple

from ..snmp_client.client import SnmpClient
from ..snmp_client.exceptions import SnmpError
from ..snmp_client.oids import (
    IF_HC_IN_OCTETS, IF_HC_OUT_OCTETS, IF_IN_DISCARDS, IF_IN_ERRORS,
    IF_OUT_DISCARDS, IF_OUT_ERRORS, indexed,
)
from .exceptions import SamplingError
from .models import COUNTER_FIELDS, COUNTER_MODULUS, CounterDelta, CounterSample, InterfaceIdentity

# Column OIDs in COUNTER_FIELDS order. The ifTable discard/error columns are
# Counter32 on the wire but share the 64-bit counter model, so a genuine 32-bit
# wrap on them is corrected with 2^64 like the ifHC octet counters.
COUNTER_COLUMNS = (
    IF_HC_IN_OCTETS,
    IF_IN_DISCARDS,
    IF_IN_ERRORS,
    IF_HC_OUT_OCTETS,
    IF_OUT_DISCARDS,
    IF_OUT_ERRORS,
)


def counter_oids(index: int) -> List[str]:
    return [indexed(column, index) for column in COUNTER_COLUMNS]


def counter_delta(current: int, previous: int, modulus: int = COUNTER_MODULUS) -> int:
    """Exact difference of two unsigned counter readings.

    A reading lower than the previous one means the counter wrapped, so
    the modulus is added back.
    """
    delta = current - previous
    if delta < 0:
        delta += modulus
    return delta


def compute_delta(current: CounterSample, previous: Optional[CounterSample]) -> Optional[CounterDelta]:
    """Delta between two samples, or None when there is no baseline yet."""
    if previous is None:
        return None

    values = {}
    wrapped = []
    for name in COUNTER_FIELDS:
        now, before = getattr(current, name), getattr(previous, name)
        values[name] = counter_delta(now, before)
        if now < before:
            wrapped.append(name)
    return CounterDelta(wrapped=tuple(wrapped), **values)


class CounterSampler:
    """Fetches the six counters of one interface and keeps the last sample.

    ``previous`` is only replaced after a request has been fully decoded,
    so a failed tick leaves the baseline of the next tick intact.
    """

    def __init__(self, client: SnmpClient, identity: InterfaceIdentity):
        self.client = client
        self.identity = identity
        self.previous: Optional[CounterSample] = None
        self._oids = counter_oids(identity.index)

    async def fetch(self) -> CounterSample:
        """One GET for all six counters."""
        try:
            values = await self.client.get(self._oids)
        except SnmpError as e:
            raise SamplingError(str(e)) from e

        decoded = {}
        for name, oid in zip(COUNTER_FIELDS, self._oids):
            value = values.get(oid)
            if value is None:
                raise SamplingError(f"no value for {name} ({oid})")
            if not isinstance(value, int):
                raise SamplingError(f"{name} ({oid}) is not a counter: {value!r}")
            decoded[name] = value

        try:
            return CounterSample(**decoded)
        except (TypeError, ValueError) as e:
            raise SamplingError(str(e)) from e

    async def sample(self) -> Tuple[CounterSample, Optional[CounterDelta]]:
        current = await self.fetch()
        delta = compute_delta(current, self.previous)
        self.commit(current)
        return current, delta

    def commit(self, sample: CounterSample) -> None:
        """Make ``sample`` the baseline for the next delta."""
        self.previous = sample

    def reset(self) -> None:
        """Forget the baseline; the next sample starts a fresh delta series."""
        self.previous = None
