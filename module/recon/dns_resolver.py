import socket
from dataclasses import dataclass
from typing import Optional


class ResolutionError(Exception):
    """Forward lookup failed; the message is the resolver's own description."""


@dataclass(frozen=True)
class Query:
    host: str
    service: Optional[str] = None
    family: int = socket.AF_UNSPEC
    socktype: int = 0


@dataclass(frozen=True)
class Endpoint:
    family: int
    protocol: int
    address: Optional[str]
    port: Optional[int]
    sockaddr: tuple
    canonical_name: Optional[str] = None


@dataclass(frozen=True)
class ReverseInfo:
    host: str
    service: str


def _address_literal(family: int, sockaddr: tuple) -> Optional[str]:
    if family not in (socket.AF_INET, socket.AF_INET6):
        return None
    # drop the "%scope" suffix so IPv6 literals print like inet_ntop
    return sockaddr[0].split("%", 1)[0]


def forward_resolve(query: Query) -> list:
    """
    Resolve a Query into Endpoints, in resolver order.

    Only the first entry carries a canonical name (AI_CANONNAME semantics).
    Raises ResolutionError if the platform resolver fails.
    """
    try:
        infos = socket.getaddrinfo(
            query.host,
            query.service,
            query.family,
            query.socktype,
            0,
            socket.AI_CANONNAME,
        )
    except socket.gaierror as e:
        raise ResolutionError(e.strerror or str(e)) from e
    except UnicodeError as e:
        # host or service text that cannot be encoded never reaches the resolver
        raise ResolutionError(f"cannot encode host or service: {e}") from e

    endpoints = []
    for index, (family, _socktype, proto, canonname, sockaddr) in enumerate(infos):
        family = int(family)
        address = _address_literal(family, sockaddr)
        port = None
        if query.service is not None and address is not None:
            port = sockaddr[1]
        endpoints.append(Endpoint(
            family=family,
            protocol=proto,
            address=address,
            port=port,
            sockaddr=sockaddr,
            canonical_name=(canonname or None) if index == 0 else None,
        ))
    return endpoints


def select_endpoints(query: Query, endpoints: list) -> list:
    """Without a service, keep only raw (protocol 0) entries to avoid TCP/UDP duplicates."""
    if query.service is not None:
        return list(endpoints)
    return [e for e in endpoints if e.protocol == 0]


def reverse_resolve(endpoint: Endpoint) -> Optional[ReverseInfo]:
    """Best-effort reverse lookup. Returns None on any failure."""
    if endpoint.address is None:
        return None

    flags = socket.NI_DGRAM if endpoint.protocol == socket.IPPROTO_UDP else 0
    try:
        host, service = socket.getnameinfo(endpoint.sockaddr, flags)
    except (OSError, UnicodeError):
        return None
    return ReverseInfo(host=host, service=service)
