# tests/core/profiles/test_profile_network.py
"""
Testes dos recursos de rede dos profiles.

O lookup HTTP é exercitado com uma sessão falsa; nenhum teste acessa a
rede. `available_port` usa a pilha local (loopback), sem tráfego externo.
"""

import pytest
import requests

from btfs_config.core.errors import ExternalLookupFailedError, InvalidAddressError
from btfs_config.core.profiles import network
from btfs_config.core.settings import values


class _FakeResponse:
    def __init__(self, text, status=200):
        self.text = text
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")


class _FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.exc is not None:
            raise self.exc
        return self.response


def test_external_ip_builds_announce_address():
    session = _FakeSession(_FakeResponse("203.0.113.7\n"))
    addr = network.external_ip(session=session)

    assert addr == "/ip4/203.0.113.7/tcp/4001"
    assert session.calls == [(values.lookup_url(), values.lookup_timeout())]


def test_external_ip_custom_ports_and_timeout():
    session = _FakeSession(_FakeResponse("198.51.100.1"))
    addr = network.external_ip(
        ext_port=14001,
        int_port=4001,
        swarm_addrs=["/ip4/0.0.0.0/tcp/4001"],
        timeout=1.5,
        session=session,
    )
    assert addr == "/ip4/198.51.100.1/tcp/14001"
    assert session.calls[0][1] == 1.5


@pytest.mark.parametrize(
    "swarm_addrs",
    [
        ["/ip4/0.0.0.0/tcp/5555"],
        ["/ip4/0.0.0.0/tcp/4001/ws"],
    ],
)
def test_external_ip_rejects_bad_swarm_addresses(swarm_addrs):
    session = _FakeSession(_FakeResponse("198.51.100.1"))
    with pytest.raises(InvalidAddressError):
        network.external_ip(int_port=4001, swarm_addrs=swarm_addrs, session=session)
    assert session.calls == []


def test_external_ip_network_error():
    session = _FakeSession(exc=requests.ConnectionError("offline"))
    with pytest.raises(ExternalLookupFailedError):
        network.external_ip(session=session)


def test_external_ip_http_error():
    session = _FakeSession(_FakeResponse("oops", status=503))
    with pytest.raises(ExternalLookupFailedError):
        network.external_ip(session=session)


def test_external_ip_rejects_non_ipv4_body():
    session = _FakeSession(_FakeResponse("<html>blocked</html>"))
    with pytest.raises(ExternalLookupFailedError):
        network.external_ip(session=session)


def test_external_ip_without_session_uses_requests(monkeypatch):
    monkeypatch.setattr(requests, "get", lambda url, timeout=None: _FakeResponse("192.0.2.10"))
    assert network.external_ip() == "/ip4/192.0.2.10/tcp/4001"


def test_available_port_returns_bindable_port():
    port = network.available_port()
    assert isinstance(port, int)
    assert 0 < port < 65536
