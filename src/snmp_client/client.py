"""Async SNMP client used by the port viewer (read-only)."""

from typing import Any, AsyncIterator, Dict, List, Optional, Sequence, Tuple

from pyasn1.type import univ
from pysnmp.error import PySnmpError
from pysnmp.hlapi.v3arch.asyncio import (
    CommunityData,
    ContextData,
    ObjectIdentity,
    ObjectType,
    SnmpEngine,
    UdpTransportTarget,
    UsmUserData,
    bulk_cmd,
    get_cmd,
    next_cmd,
)
from pysnmp.proto import rfc1902, rfc1905

from .exceptions import *
from .oids import is_under, oid_key
from ..utils.logger import get_logger, update_logger_device_context
from config.settings import settings, SNMP_VERSIONS

logger = get_logger(__name__)

VarBind = Tuple[str, Any]

# Marker for endOfMibView so walks can stop without confusing it with a
# missing (None) value.
END_OF_MIB_VIEW = object()


def decode_value(value: Any) -> Any:
    """Convert a pysnmp value into a plain Python value.

    Integer-like SNMP types (Counter64 included) become unbounded ``int``,
    octet strings become ``str``, exception values become ``None``.
    """
    if isinstance(value, rfc1905.EndOfMibView):
        return END_OF_MIB_VIEW
    if isinstance(value, (rfc1905.NoSuchObject, rfc1905.NoSuchInstance, univ.Null)):
        return None
    if isinstance(value, univ.Integer):
        return int(value)
    if isinstance(value, rfc1902.IpAddress):
        return value.prettyPrint()
    if isinstance(value, univ.OctetString):
        return value.asOctets().decode('utf-8', errors='replace')
    if isinstance(value, univ.ObjectIdentifier):
        return str(value)
    return value.prettyPrint()


class SnmpClient:
    """One SNMP session against a single agent.

    All requests go out as single PDUs: ``get`` batches every OID into one
    GET, ``walk_pages`` issues one GETBULK (GETNEXT on SNMPv1) per page.
    """

    def __init__(self, host: str = None, port: int = None, community: str = None,
                 version: str = None, timeout: float = None, retries: int = None,
                 username: str = None):
        agent = settings.get_agent()

        self.host = host or agent.get('host')
        self.port = port or agent.get('port', 161)
        self.community = community or agent.get('community')
        self.version = str(version or agent.get('version', '2c')).lower()
        self.timeout = timeout if timeout is not None else agent.get('timeout', 2)
        self.retries = retries if retries is not None else agent.get('retries', 1)
        self.username = username or agent.get('username')

        self._validate()

        self._engine: Optional[SnmpEngine] = None
        self._target: Optional[UdpTransportTarget] = None

        update_logger_device_context(logger, f"{self.host}:{self.port}")

    def _validate(self) -> None:
        if not self.host:
            raise ConfigurationError("SNMP agent host must be specified")
        if self.version not in SNMP_VERSIONS:
            raise ConfigurationError(
                f"Unsupported SNMP version '{self.version}' (expected one of {', '.join(SNMP_VERSIONS)})"
            )
        if self.version == '3':
            if not self.username:
                raise ConfigurationError("SNMPv3 requires a user name")
        elif not self.community:
            raise ConfigurationError(f"SNMP v{self.version} requires a community string")
        if self.timeout <= 0:
            raise ConfigurationError("SNMP timeout must be positive")

    def _auth_data(self):
        if self.version == '3':
            return UsmUserData(self.username)
        # mpModel 0 = SNMPv1, 1 = SNMPv2c
        return CommunityData(self.community, mpModel=0 if self.version == '1' else 1)

    @property
    def is_open(self) -> bool:
        return self._target is not None

    async def open(self) -> None:
        """Create the engine and resolve the agent address."""
        if self.is_open:
            return
        self._engine = SnmpEngine()
        try:
            self._target = await UdpTransportTarget.create(
                (self.host, self.port), timeout=self.timeout, retries=self.retries
            )
        except (PySnmpError, OSError) as e:
            self.close()
            raise TransportError(f"Cannot reach {self.host}:{self.port}: {e}") from e
        logger.info(f"SNMP v{self.version} session opened to {self.host}:{self.port}")

    def close(self) -> None:
        """Release the engine's transport dispatcher."""
        if self._engine is not None:
            self._engine.close_dispatcher()
        self._engine = None
        self._target = None

    async def __aenter__(self) -> "SnmpClient":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

    async def _send(self, command, *args, **kwargs) -> List[VarBind]:
        """Run one pysnmp command and return the raw (oid, value) pairs."""
        if not self.is_open:
            await self.open()

        try:
            error_indication, error_status, error_index, var_binds = await command(
                self._engine, self._auth_data(), self._target, ContextData(),
                *args, lookupMib=False, **kwargs
            )
        except (PySnmpError, OSError) as e:
            raise TransportError(f"SNMP request to {self.host} failed: {e}") from e

        if error_indication:
            raise TransportError(str(error_indication))

        rows = [
            (str(name), value)
            for name, value in self._flatten(var_binds)
        ]

        if error_status and int(error_status) != 0:
            index = int(error_index or 0)
            oid = rows[index - 1][0] if 0 < index <= len(rows) else None
            raise ProtocolError(error_status.prettyPrint(), index, oid)

        return rows

    @staticmethod
    def _flatten(var_binds) -> List:
        # Older hlapi releases return GETBULK results as a table of rows
        flat = []
        for item in var_binds or ():
            if isinstance(item, (list, tuple)) and item and not isinstance(item[0], univ.ObjectIdentifier):
                flat.extend(item)
            else:
                flat.append(item)
        return [(vb[0], vb[1]) for vb in flat]

    @staticmethod
    def _object_types(oids: Sequence[str]) -> List[ObjectType]:
        return [ObjectType(ObjectIdentity(oid)) for oid in oids]

    async def get(self, oids: Sequence[str]) -> Dict[str, Any]:
        """GET every OID in one request; values keyed by the requested OID."""
        oids = [oid.strip('.') for oid in oids]
        rows = await self._send(get_cmd, *self._object_types(oids))
        logger.debug(f"GET {len(oids)} oid(s) -> {len(rows)} varbind(s)")

        if len(rows) != len(oids):
            raise TransportError(f"Expected {len(oids)} varbinds, agent returned {len(rows)}")

        result = {}
        for oid, (_, value) in zip(oids, rows):
            decoded = decode_value(value)
            result[oid] = None if decoded is END_OF_MIB_VIEW else decoded
        return result

    async def get_bulk(self, oids: Sequence[str], max_repetitions: int,
                       non_repeaters: int = 0) -> List[VarBind]:
        """One GETBULK request; a flat list of (oid, decoded value)."""
        if self.version == '1':
            raise ConfigurationError("GETBULK is not available in SNMPv1")
        oids = [oid.strip('.') for oid in oids]
        rows = await self._send(bulk_cmd, non_repeaters, max_repetitions, *self._object_types(oids))
        return [(oid, decode_value(value)) for oid, value in rows]

    async def _get_next(self, oid: str) -> List[VarBind]:
        rows = await self._send(next_cmd, *self._object_types([oid]))
        return [(name, decode_value(value)) for name, value in rows]

    async def walk_pages(self, base_oid: str, page_size: int = 10) -> AsyncIterator[List[VarBind]]:
        """Walk the ``base_oid`` subtree, yielding one page per request.

        Iteration is lazy: requests are only sent as pages are consumed, so
        a caller that stops early never pulls the rest of the table.
        """
        base_oid = base_oid.strip('.')
        current = base_oid

        while True:
            if self.version == '1':
                response = await self._get_next(current)
            else:
                response = await self.get_bulk([current], page_size)

            page = []
            finished = not response
            for oid, value in response:
                if value is END_OF_MIB_VIEW or not is_under(oid, base_oid):
                    finished = True
                    break
                if oid_key(oid) <= oid_key(current):
                    logger.warning(f"Agent returned non-increasing OID {oid} after {current}")
                    finished = True
                    break
                page.append((oid, value))
                current = oid

            if page:
                yield page
            if finished:
                return
