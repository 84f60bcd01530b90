"""Converters for network address types.

Registered types:

- `ipaddress.IPv4Address` / `ipaddress.IPv6Address`: one address of that family.
- `IPv4Address | IPv6Address`: an address of either family.
- `ipaddress.IPv4Network` / `ipaddress.IPv6Network` (and their union): a
  network in CIDR notation; host bits may be set.
- `TCPAddr` / `UDPAddr`: `host`, `host:port` or `[v6-host]:port`; the host is
  resolved and a missing port means 0.

Every converter returns its value and leaves module state untouched.
"""

from __future__ import annotations

import socket
from dataclasses import dataclass
from ipaddress import (
    IPv4Address,
    IPv4Network,
    IPv6Address,
    IPv6Network,
    ip_address,
    ip_network,
)
from typing import Sequence, Union

from ..registry import TypeRegistry, one_value

IPAddress = Union[IPv4Address, IPv6Address]
IPNetwork = Union[IPv4Network, IPv6Network]


@dataclass(frozen=True, slots=True)
class TCPAddr:
    """A resolved TCP endpoint; `ip` is `None` for an empty host (any address)."""

    ip: IPAddress | None
    port: int


@dataclass(frozen=True, slots=True)
class UDPAddr:
    """A resolved UDP endpoint; `ip` is `None` for an empty host (any address)."""

    ip: IPAddress | None
    port: int


def parse_ip(values: Sequence[str]) -> IPAddress:
    try:
        return ip_address(values[0])
    except ValueError:
        raise ValueError(f"not a valid IP address: {values[0]}") from None


def parse_ipv4(values: Sequence[str]) -> IPv4Address:
    try:
        return IPv4Address(values[0])
    except ValueError:
        raise ValueError(f"not a valid IPv4 address: {values[0]}") from None


def parse_ipv6(values: Sequence[str]) -> IPv6Address:
    try:
        return IPv6Address(values[0])
    except ValueError:
        raise ValueError(f"not a valid IPv6 address: {values[0]}") from None


def parse_network(values: Sequence[str]) -> IPNetwork:
    return ip_network(values[0], strict=False)


def parse_ipv4_network(values: Sequence[str]) -> IPv4Network:
    return IPv4Network(values[0], strict=False)


def parse_ipv6_network(values: Sequence[str]) -> IPv6Network:
    return IPv6Network(values[0], strict=False)


def split_host_port(address: str) -> tuple[str, str]:
    """Split `address` into host and port; a missing or empty port is `"0"`.

    Bracketed hosts (`[::1]:53`) are unwrapped. An address with more than one
    colon and no brackets is taken as a bare IPv6 host.
    """

    if address.startswith("["):
        host, closed, rest = address[1:].partition("]")
        if not closed:
            raise ValueError(f"missing ']' in address: {address}")
        if not rest:
            return host, "0"
        if not rest.startswith(":"):
            raise ValueError(f"unexpected text after ']' in address: {address}")
        return host, rest[1:] or "0"
    if address.count(":") == 1:
        host, _, port = address.partition(":")
        return host, port or "0"
    return address, "0"


def _resolve(address: str, socket_type: int, protocol: str) -> tuple[IPAddress | None, int]:
    """Resolve `address` to an IP and port for the given socket type."""

    host, port_text = split_host_port(address)
    if port_text.isdigit():
        port = int(port_text)
    else:
        port = socket.getservbyname(port_text, protocol)
    if port > 65535:
        raise ValueError(f"invalid port: {port_text}")
    if not host:
        return None, port

    infos = socket.getaddrinfo(host, port, type=socket_type)
    resolved = infos[0][4][0]
    return ip_address(resolved.split("%", 1)[0]), port


def parse_tcp_addr(values: Sequence[str]) -> TCPAddr:
    ip, port = _resolve(values[0], socket.SOCK_STREAM, "tcp")
    return TCPAddr(ip=ip, port=port)


def parse_udp_addr(values: Sequence[str]) -> UDPAddr:
    ip, port = _resolve(values[0], socket.SOCK_DGRAM, "udp")
    return UDPAddr(ip=ip, port=port)


def register_net_types(registry: TypeRegistry) -> TypeRegistry:
    """Register the network converter chains on `registry` and return it."""

    registry.register(IPAddress, one_value, parse_ip)
    registry.register(IPv4Address, one_value, parse_ipv4)
    registry.register(IPv6Address, one_value, parse_ipv6)
    registry.register(IPNetwork, one_value, parse_network)
    registry.register(IPv4Network, one_value, parse_ipv4_network)
    registry.register(IPv6Network, one_value, parse_ipv6_network)
    registry.register(TCPAddr, one_value, parse_tcp_addr)
    registry.register(UDPAddr, one_value, parse_udp_addr)
    return registry
