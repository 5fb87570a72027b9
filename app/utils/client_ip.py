"""
app/utils/client_ip.py

Best-effort client IP extraction from proxy headers.
"""

from __future__ import annotations

import ipaddress
from typing import Mapping

UNKNOWN_CLIENT_IP = "unknown"

_SINGLE_VALUE_HEADERS = ("x-real-ip", "cf-connecting-ip", "x-client-ip")


def _parse_ip(value: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address | None:
    try:
        return ipaddress.ip_address(value.strip())
    except ValueError:
        return None


def _is_public(address: ipaddress.IPv4Address | ipaddress.IPv6Address) -> bool:
    return not (
        address.is_private
        or address.is_loopback
        or address.is_link_local
        or address.is_reserved
        or address.is_unspecified
        or address.is_multicast
    )


def _from_forwarded_for(value: str) -> str | None:
    """
    First public address in the chain, else the first valid one.
    """

    addresses = [address for address in (_parse_ip(part) for part in value.split(",")) if address is not None]
    if not addresses:
        return None
    for address in addresses:
        if _is_public(address):
            return str(address)
    return str(addresses[0])


def get_client_ip(headers: Mapping[str, str]) -> str:
    """
    Resolve the caller's IP from request headers.

    Header lookups are case-insensitive. Returns "unknown" when no header
    carries a valid address.
    """

    lowered = {key.lower(): value for key, value in headers.items()}

    forwarded_for = lowered.get("x-forwarded-for")
    if forwarded_for:
        resolved = _from_forwarded_for(forwarded_for)
        if resolved:
            return resolved

    for header in _SINGLE_VALUE_HEADERS:
        value = lowered.get(header)
        if not value:
            continue
        address = _parse_ip(value)
        if address is not None:
            return str(address)

    return UNKNOWN_CLIENT_IP
