from __future__ import annotations

import logging

import dns.exception
import dns.resolver

from ..config import DEFAULT_RESOLV_CONF, DEFAULT_REVERSE_TIMEOUT
from ..errors import ReverseLookupError

log = logging.getLogger(__name__)


def reverse_lookup(
    ip: str,
    timeout: float = DEFAULT_REVERSE_TIMEOUT,
    resolv_conf: str = DEFAULT_RESOLV_CONF,
) -> list[str]:
    """
    PTR lookup for an IPv4/IPv6 address through the system resolver.
    Hostnames come back fully qualified. Any failure, including running
    past ``timeout`` seconds, raises ReverseLookupError.
    """
    log.debug("Reverse lookup for %s (timeout=%ss, config=%s)", ip, timeout, resolv_conf)
    try:
        resolver = dns.resolver.Resolver(filename=resolv_conf)
        answer = resolver.resolve_address(ip, lifetime=timeout)
    except dns.resolver.LifetimeTimeout as e:
        raise ReverseLookupError(f"reverse lookup for {ip} timed out after {timeout:g}s") from e
    except dns.resolver.NXDOMAIN as e:
        raise ReverseLookupError(f"no PTR record for {ip}") from e
    except (dns.exception.DNSException, ValueError) as e:
        raise ReverseLookupError(f"reverse lookup for {ip} failed: {e}") from e

    return [rdata.target.to_text() for rdata in answer]
