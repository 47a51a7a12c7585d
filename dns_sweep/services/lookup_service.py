from __future__ import annotations

import logging
import socket

import dns.exception
import dns.inet
import dns.resolver

from ..config import LookupConfig
from ..errors import ConfigurationError, UsageError
from ..plugins.dns import (
    ServerAddress,
    encode_results,
    fetch_dns_records,
    parse_server_address,
)
from ..plugins.reverse import reverse_lookup

log = logging.getLogger(__name__)


def system_server_address(resolv_conf: str) -> ServerAddress:
    """First nameserver (and its port) listed in the resolver configuration."""
    try:
        resolver = dns.resolver.Resolver(filename=resolv_conf)
    except dns.exception.DNSException as e:
        log.debug("Cannot use resolver configuration %s: %s", resolv_conf, e)
        raise ConfigurationError("could not load system DNS configuration") from e

    if not resolver.nameservers:
        raise ConfigurationError("could not load system DNS configuration")

    # Newer dnspython wraps entries in Nameserver objects with their own port.
    first = resolver.nameservers[0]
    host = getattr(first, "address", first)
    port = getattr(first, "port", resolver.port)
    return ServerAddress(host=str(host), port=int(port))


def _to_ip_literal(address: ServerAddress) -> ServerAddress:
    if dns.inet.is_address(address.host):
        return address
    try:
        infos = socket.getaddrinfo(address.host, address.port, type=socket.SOCK_DGRAM)
    except (socket.gaierror, UnicodeError) as e:
        raise ConfigurationError(f"cannot resolve DNS server host {address.host!r}: {e}") from e
    if not infos:
        raise ConfigurationError(f"cannot resolve DNS server host {address.host!r}")
    ip = infos[0][4][0]
    log.debug("DNS server host %s resolved to %s", address.host, ip)
    return ServerAddress(host=ip, port=address.port)


def resolve_server(config: LookupConfig) -> ServerAddress:
    if config.server:
        return _to_ip_literal(parse_server_address(config.server))
    return system_server_address(config.resolv_conf)


def run_forward(config: LookupConfig) -> str:
    if not config.domain:
        raise UsageError("--domain flag is required")

    server = resolve_server(config)
    log.debug("Using DNS server %s for %s", server, config.domain)
    results = fetch_dns_records(config.domain, server, timeout=config.query_timeout)
    return encode_results(results)


def run_reverse(config: LookupConfig) -> list[str]:
    if not config.ip:
        raise UsageError("missing IP address", usage="dns-sweep reverse <ip>")
    return reverse_lookup(config.ip, timeout=config.reverse_timeout, resolv_conf=config.resolv_conf)
