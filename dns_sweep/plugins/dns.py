from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import dns.exception
import dns.flags
import dns.message
import dns.query
import dns.rcode
import dns.rdatatype

from ..config import DEFAULT_QUERY_TIMEOUT
from ..errors import ConfigurationError, SerializationError

log = logging.getLogger(__name__)

DEFAULT_PORT = 53

# ANY is never asked for; each type gets its own query.
RECORD_TYPES: tuple[dns.rdatatype.RdataType, ...] = (
    dns.rdatatype.A,
    dns.rdatatype.AAAA,
    dns.rdatatype.MX,
    dns.rdatatype.TXT,
    dns.rdatatype.NS,
    dns.rdatatype.SOA,
    dns.rdatatype.SRV,
    dns.rdatatype.PTR,
    dns.rdatatype.CAA,
    dns.rdatatype.NAPTR,
    dns.rdatatype.CNAME,
)


@dataclass(frozen=True)
class ServerAddress:
    host: str
    port: int = DEFAULT_PORT

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class RecordSet:
    records: list[str]

    def to_json(self) -> list[str]:
        return list(self.records)


@dataclass(frozen=True)
class RecordError:
    message: str

    def to_json(self) -> dict[str, str]:
        return {"error": self.message}


RecordResult = RecordSet | RecordError


def fqdn(domain: str) -> str:
    d = domain.strip()
    return d if d.endswith(".") else d + "."


def _parse_port(raw: str, original: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ConfigurationError(f"invalid port in DNS server address {original!r}") from None
    if not 0 < port < 65536:
        raise ConfigurationError(f"invalid port in DNS server address {original!r}")
    return port


def parse_server_address(text: str) -> ServerAddress:
    """
    Parse ``host:port``, ``[v6]:port`` or a bare host into a ServerAddress.
    A missing port means 53.
    """
    value = text.strip()
    if not value:
        raise ConfigurationError("empty DNS server address")

    if value.startswith("["):
        host, sep, rest = value[1:].partition("]")
        if not sep or not host or (rest and not rest.startswith(":")):
            raise ConfigurationError(f"malformed DNS server address {text!r}")
        port_text = rest[1:]
    elif value.count(":") == 1:
        host, port_text = value.split(":")
    else:
        # bare IPv4, hostname or unbracketed IPv6
        host, port_text = value, ""

    if not host:
        raise ConfigurationError(f"malformed DNS server address {text!r}")
    port = _parse_port(port_text, text) if port_text else DEFAULT_PORT
    return ServerAddress(host=host, port=port)


def _query_one(qname: str, rdtype: dns.rdatatype.RdataType, server: ServerAddress, timeout: float | None) -> dns.message.Message:
    msg = dns.message.make_query(qname, rdtype)
    msg.flags |= dns.flags.RD
    return dns.query.udp(msg, server.host, timeout=timeout, port=server.port)


def fetch_dns_records(
    domain: str,
    server: ServerAddress,
    timeout: float | None = DEFAULT_QUERY_TIMEOUT,
) -> dict[str, RecordResult]:
    qname = fqdn(domain)
    results: dict[str, RecordResult] = {}

    for rdtype in RECORD_TYPES:
        type_name = dns.rdatatype.to_text(rdtype)
        log.debug("Querying %s %s @%s", qname, type_name, server)
        try:
            response = _query_one(qname, rdtype, server, timeout)
        except (dns.exception.DNSException, OSError, ValueError) as e:
            log.info("Query %s %s @%s failed: %s", qname, type_name, server, e)
            results[type_name] = RecordError(str(e) or e.__class__.__name__)
            continue

        if response.rcode() != dns.rcode.NOERROR or not response.answer:
            log.debug(
                "No %s records for %s (rcode=%s)",
                type_name,
                qname,
                dns.rcode.to_text(response.rcode()),
            )
            continue

        values: list[str] = []
        for rrset in response.answer:
            values.extend(line for line in rrset.to_text().splitlines() if line)
        results[type_name] = RecordSet(values)

    return results


def encode_results(results: dict[str, RecordResult]) -> str:
    payload: dict[str, Any] = {name: result.to_json() for name, result in results.items()}
    try:
        return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"marshaling JSON: {e}") from e
