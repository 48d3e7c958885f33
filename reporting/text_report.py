import socket
from typing import Callable, Iterator, Optional

from module.recon.dns_resolver import (
    Endpoint,
    Query,
    ReverseInfo,
    reverse_resolve,
    select_endpoints,
)

PROTOCOL_NAMES = {
    0: "RAW",
    socket.IPPROTO_ICMP: "ICMP",
    socket.IPPROTO_TCP: "TCP",
    socket.IPPROTO_UDP: "UDP",
}

FAMILY_NAMES = {
    socket.AF_INET: "IPv4",
    socket.AF_INET6: "IPv6",
}


def proto_desc(protocol: int) -> str:
    return PROTOCOL_NAMES.get(protocol, "UNKNOWN")


def canonical_line(query: Query, endpoints: list) -> Optional[str]:
    """Canonical name announcement, skipped when it just repeats the input host."""
    if not endpoints:
        return None
    name = endpoints[0].canonical_name
    if not name or name.casefold() == query.host.casefold():
        return None
    return f"Canonical name {name}"


def format_endpoint(endpoint: Endpoint, reverse: Optional[ReverseInfo], with_service: bool) -> str:
    label = FAMILY_NAMES.get(endpoint.family)
    if label is None:
        return f"Unknown record type {endpoint.family}"

    line = f"{label} address {endpoint.address}"
    if with_service:
        line += f", {proto_desc(endpoint.protocol)} port {endpoint.port}"
    if reverse is not None:
        if with_service:
            line += f", reverse name {reverse.host} service {reverse.service}"
        else:
            line += f", reverse {reverse.host}"
    return line


def report_lines(
    query: Query,
    endpoints: list,
    reverse_lookup: Callable[[Endpoint], Optional[ReverseInfo]] = reverse_resolve,
) -> Iterator[str]:
    """
    Yield the text report for one forward lookup.

    The reverse lookup runs lazily, one endpoint at a time, so callers can
    print each line as soon as it is ready.
    """
    header = canonical_line(query, endpoints)
    if header:
        yield header

    with_service = query.service is not None
    for endpoint in select_endpoints(query, endpoints):
        reverse = None
        if endpoint.family in FAMILY_NAMES:
            reverse = reverse_lookup(endpoint)
        yield format_endpoint(endpoint, reverse, with_service)
