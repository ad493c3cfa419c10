from __future__ import annotations

import re
import struct

from .errors import AddressParseError, EncodingError

_COLON_OR_DASH_RE = re.compile(r"[0-9A-F]{2}([:-])(?:[0-9A-F]{2}\1){4}[0-9A-F]{2}")
_DOTTED_RE = re.compile(r"[0-9A-F]{4}\.[0-9A-F]{4}\.[0-9A-F]{4}")
_BARE_RE = re.compile(r"[0-9A-F]{12}")


def parse_mac(mac: str) -> bytes:
    """
    Parse a MAC address literal into its 6 raw bytes.

    Accepts colon-, dash- or dot-separated hex and bare 12-digit hex.
    """
    if not isinstance(mac, str):
        raise AddressParseError(f"invalid MAC address: {mac!r}", mac)

    m = mac.strip().upper()
    if not (
        _COLON_OR_DASH_RE.fullmatch(m)
        or _DOTTED_RE.fullmatch(m)
        or _BARE_RE.fullmatch(m)
    ):
        raise AddressParseError(f"invalid MAC address: {mac!r}", mac)

    return bytes.fromhex(re.sub(r"[:.-]", "", m))


def mac_to_int(raw: bytes) -> int:
    """
    Big-endian 48-bit value of a 6-byte address, padded to an unsigned 64-bit int.
    """
    padded = b"\x00\x00" + bytes(raw)
    try:
        (value,) = struct.unpack(">Q", padded)
    except struct.error as e:
        raise EncodingError(
            f"could not read u64 from padded MAC byte array: {padded!r}", raw
        ) from e
    return value


def format_mac(value: int) -> str:
    return ":".join(f"{b:02X}" for b in value.to_bytes(6, "big"))
