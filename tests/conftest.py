import socket

import pytest


def addrinfo(family, socktype, proto, address, port=0, canonname=""):
    """Build one getaddrinfo() result tuple."""
    if family == socket.AF_INET6:
        sockaddr = (address, port, 0, 0)
    elif family == socket.AF_INET:
        sockaddr = (address, port)
    else:
        sockaddr = (family, b"")
    return (family, socktype, proto, canonname, sockaddr)


class FakeResolver:
    """Stands in for socket.getaddrinfo/getnameinfo and records every call."""

    def __init__(self, results=None, reverse=None, error=None):
        self.results = results or []
        self.reverse = reverse or {}
        self.error = error
        self.forward_calls = []
        self.reverse_calls = []

    def getaddrinfo(self, host, service, family=0, type=0, proto=0, flags=0):
        self.forward_calls.append((host, service, family, type, proto, flags))
        if self.error is not None:
            raise self.error
        return [
            r for r in self.results
            if (family == 0 or r[0] == family) and (type == 0 or r[1] == type)
        ]

    def getnameinfo(self, sockaddr, flags):
        self.reverse_calls.append((sockaddr, flags))
        answer = self.reverse.get(sockaddr[0])
        if answer is None:
            raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")
        host, service = answer
        if sockaddr[1] == 0:
            service = "0"
        return host, service


@pytest.fixture
def fake_resolver(monkeypatch):
    resolver = FakeResolver()
    monkeypatch.setattr(socket, "getaddrinfo", resolver.getaddrinfo)
    monkeypatch.setattr(socket, "getnameinfo", resolver.getnameinfo)
    return resolver


@pytest.fixture(autouse=True)
def no_log_dir(monkeypatch):
    monkeypatch.delenv("HOSTLOOKUP_LOG_DIR", raising=False)
