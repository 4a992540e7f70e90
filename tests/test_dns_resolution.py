import socket

import pytest

from portprobe.dns_resolution import host_is_valid, is_ip_address, resolve_host


def test_ip_literals():
    assert is_ip_address("10.0.0.1")
    assert is_ip_address("::1")
    assert not is_ip_address("localhost")
    assert not is_ip_address("999.1.1.1")


def test_resolve_host_dedupes_and_sorts(monkeypatch):
    def fake_getaddrinfo(host, *_args, **_kwargs):
        return [
            (socket.AF_INET, socket.SOCK_STREAM, 0, "", ("93.184.216.35", 0)),
            (socket.AF_INET, socket.SOCK_DGRAM, 0, "", ("93.184.216.34", 0)),
            (socket.AF_INET, socket.SOCK_STREAM, 0, "", ("93.184.216.34", 0)),
        ]

    monkeypatch.setattr(socket, "getaddrinfo", fake_getaddrinfo)
    assert resolve_host("example.com") == ["93.184.216.34", "93.184.216.35"]


def test_resolve_host_without_records_fails(monkeypatch):
    monkeypatch.setattr(socket, "getaddrinfo", lambda *_a, **_k: [])
    with pytest.raises(socket.gaierror):
        resolve_host("empty.example")


def test_ip_literal_skips_lookup(monkeypatch):
    calls = []

    def fake_getaddrinfo(host, *_args, **_kwargs):
        calls.append(host)
        raise socket.gaierror("should not be called")

    monkeypatch.setattr(socket, "getaddrinfo", fake_getaddrinfo)
    assert host_is_valid("192.0.2.10")
    assert calls == []
    assert not host_is_valid("nxdomain.example")
    assert calls == ["nxdomain.example"]
