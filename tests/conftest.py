from __future__ import annotations

from pathlib import Path

import dns.message
import dns.query
import dns.rcode
import dns.rdatatype
import dns.rrset
import pytest


class FakeDnsServer:
    """Stands in for dns.query.udp and answers from canned per-type data."""

    def __init__(self) -> None:
        self.answers: dict[str, list[str]] = {}
        self.rcodes: dict[str, int] = {}
        self.failures: dict[str, Exception] = {}
        self.calls: list[tuple[str, str, int]] = []
        self.timeouts: list[float | None] = []

    def __call__(self, q, where, timeout=None, port=53, **kwargs):
        question = q.question[0]
        type_name = dns.rdatatype.to_text(question.rdtype)
        self.calls.append((type_name, where, port))
        self.timeouts.append(timeout)
        if type_name in self.failures:
            raise self.failures[type_name]

        resp = dns.message.make_response(q)
        resp.set_rcode(self.rcodes.get(type_name, dns.rcode.NOERROR))
        values = self.answers.get(type_name)
        if values:
            resp.answer.append(
                dns.rrset.from_text(question.name, 300, "IN", type_name, *values)
            )
        return resp


@pytest.fixture()
def fake_dns(monkeypatch: pytest.MonkeyPatch) -> FakeDnsServer:
    server = FakeDnsServer()
    monkeypatch.setattr(dns.query, "udp", server)
    return server


@pytest.fixture()
def resolv_conf(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    path = tmp_path / "resolv.conf"
    path.write_text("search example.net\nnameserver 192.0.2.53\nnameserver 192.0.2.54\n")
    monkeypatch.setenv("DNS_SWEEP_RESOLV_CONF", str(path))
    return path
