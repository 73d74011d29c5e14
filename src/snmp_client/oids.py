"""Object identifiers from SNMPv2-MIB and IF-MIB used by the port viewer."""

SYS_NAME = "1.3.6.1.2.1.1.5.0"

# IF-MIB ifXTable
IF_NAME = "1.3.6.1.2.1.31.1.1.1.1"
IF_HC_IN_OCTETS = "1.3.6.1.2.1.31.1.1.1.6"
IF_HC_OUT_OCTETS = "1.3.6.1.2.1.31.1.1.1.10"
IF_HIGH_SPEED = "1.3.6.1.2.1.31.1.1.1.15"  # Mbps
IF_ALIAS = "1.3.6.1.2.1.31.1.1.1.18"

# IF-MIB ifTable
IF_IN_DISCARDS = "1.3.6.1.2.1.2.2.1.13"
IF_IN_ERRORS = "1.3.6.1.2.1.2.2.1.14"
IF_OUT_DISCARDS = "1.3.6.1.2.1.2.2.1.19"
IF_OUT_ERRORS = "1.3.6.1.2.1.2.2.1.20"


def indexed(base: str, index: int) -> str:
    """Append an instance index to a column OID."""
    return f"{base}.{index}"


def is_under(oid: str, base: str) -> bool:
    """True if ``oid`` lies strictly inside the ``base`` subtree."""
    return oid.startswith(base + ".")


def index_of(oid: str, base: str) -> int:
    """Return the first sub-identifier after ``base`` (the ifIndex for table columns)."""
    if not is_under(oid, base):
        raise ValueError(f"{oid} is not under {base}")
    return int(oid[len(base) + 1:].split(".")[0])


def oid_key(oid: str):
    """Sort/compare key giving lexicographic OID order."""
    return tuple(int(part) for part in oid.strip(".").split("."))
