"""Resolve a user-supplied interface token to an ifIndex and its metadata."""

import re
from typing import Optional, Tuple

from ..snmp_client.client import SnmpClient
from ..snmp_client.exceptions import SnmpError
from ..snmp_client.oids import IF_ALIAS, IF_HIGH_SPEED, IF_NAME, SYS_NAME, index_of, indexed
from .exceptions import InterfaceNotFoundError, ResolutionError
from .models import InterfaceIdentity, ResolvedInterface

# ".14" addresses ifIndex 14 directly
INDEX_TOKEN = re.compile(r'^\.\d+$')

DEFAULT_PAGE_SIZE = 10


def is_index_token(token: str) -> bool:
    return bool(INDEX_TOKEN.match(token))


class InterfaceResolver:
    """Turns ``".14"`` or a name fragment like ``"ge-0/0/1"`` into an interface.

    Name fragments are matched case-insensitively as substrings against
    ifName, walking the table in agent order. The first hit wins even if a
    later entry would match more closely.
    """

    def __init__(self, client: SnmpClient, page_size: int = DEFAULT_PAGE_SIZE):
        self.client = client
        self.page_size = page_size

    async def resolve(self, token: str) -> ResolvedInterface:
        token = token or ""
        if not token.strip():
            raise ResolutionError("interface name must not be empty", token)

        if is_index_token(token):
            index, name = await self._lookup_index(token)
        else:
            index, name = await self._search_name(token)

        return await self._describe(token, index, name)

    async def _lookup_index(self, token: str) -> Tuple[int, str]:
        index = int(token[1:])
        if index <= 0:
            raise ResolutionError(f"invalid interface index '{token}'", token)

        oid = indexed(IF_NAME, index)
        try:
            values = await self.client.get([oid])
        except SnmpError as e:
            raise ResolutionError(str(e), token) from e

        name = values.get(oid)
        if name is None:
            raise InterfaceNotFoundError(token)
        return index, str(name)

    async def _search_name(self, token: str) -> Tuple[int, str]:
        needle = token.upper()
        try:
            async for page in self.client.walk_pages(IF_NAME, self.page_size):
                match = first_match(page, needle)
                if match is not None:
                    return match
        except SnmpError as e:
            raise ResolutionError(str(e), token) from e

        raise InterfaceNotFoundError(token)

    async def _describe(self, token: str, index: int, name: str) -> ResolvedInterface:
        alias_oid = indexed(IF_ALIAS, index)
        speed_oid = indexed(IF_HIGH_SPEED, index)

        try:
            values = await self.client.get([SYS_NAME, alias_oid, speed_oid])
        except SnmpError as e:
            raise ResolutionError(str(e), token) from e

        speed = values.get(speed_oid)
        if not isinstance(speed, int):
            raise ResolutionError(f"interface '{name}' has no ifHighSpeed", token)

        identity = InterfaceIdentity(
            index=index,
            name=name,
            alias=values.get(alias_oid) or "",
            speed_mbps=speed,
        )
        return ResolvedInterface(identity=identity, sys_name=values.get(SYS_NAME) or "")


def first_match(page, needle: str) -> Optional[Tuple[int, str]]:
    """First (ifIndex, ifName) in ``page`` whose name contains ``needle`` (upper-cased)."""
    for oid, value in page:
        if value is None:
            continue
        name = str(value)
        if needle in name.upper():
            return index_of(oid, IF_NAME), name
    return None
