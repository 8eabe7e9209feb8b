"""
Host and path parsing for tenant resolution.

Everything here is purely syntactic: no lookups, no validation that a base
domain is a real registrable domain.

Examples:
    "appointza.momantza.com"  -> subdomain "appointza", base "momantza.com"
    "appointza.localhost"     -> subdomain "appointza", base "localhost"
    "momantza.com"            -> subdomain "momantza",  base "com"
    "localhost"               -> no subdomain,          base "localhost"
"""

import re
from dataclasses import dataclass
from typing import Optional


# 32 hex digits, or hyphenated 8-4-4-4-12 with optional braces
_UUID_FORMS = re.compile(
    r"[0-9a-f]{32}"
    r"|[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
    r"|\{[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}\}",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class HostParts:
    """Decomposed request host."""

    host: str
    subdomain: Optional[str]
    base_domain: str


def strip_port(host: str) -> str:
    """Drop a trailing ``:port`` from a Host header value."""
    if host.startswith("["):
        # IPv6 literal, e.g. "[::1]:8000"
        end = host.find("]")
        return host[: end + 1] if end != -1 else host
    name, sep, port = host.rpartition(":")
    if sep and port.isdigit():
        return name
    return host


def split_host(host: str) -> HostParts:
    """
    Split a host into subdomain and base domain.

    The host is lower-cased and stripped of its port. With two or more
    dot-separated labels, label[0] is the subdomain and the remaining labels
    form the base domain. Otherwise there is no subdomain and the whole host
    is the base domain.

    An empty leftmost label (".example.com") still splits, but the resulting
    empty subdomain is reported as None.
    """
    normalized = strip_port((host or "").strip().lower())
    labels = normalized.split(".")

    if len(labels) >= 2:
        return HostParts(
            host=normalized,
            subdomain=labels[0] or None,
            base_domain=".".join(labels[1:]),
        )
    return HostParts(host=normalized, subdomain=None, base_domain=normalized)


def is_valid_uuid(value: str) -> bool:
    """Accept the plain, hyphenated and braced forms only; no urn: prefix."""
    return isinstance(value, str) and _UUID_FORMS.fullmatch(value) is not None


def extract_tenant_id_from_path(path: str) -> Optional[str]:
    """
    Extract a candidate tenant identifier from a URL path.

    Patterns:
        /org/<value>[/...]  -> <value>, exactly as written
        /<uuid>             -> <uuid>, only when it is the single segment

    A single segment that is not a UUID yields None.
    """
    if not path:
        return None

    parts = path.split("/")

    # "/org/abc/..." -> ["", "org", "abc", ...]
    if len(parts) >= 3 and parts[0] == "" and parts[1].lower() == "org" and parts[2]:
        return parts[2]

    # "/<uuid>" -> ["", "<uuid>"]
    if len(parts) == 2 and parts[0] == "" and parts[1] and is_valid_uuid(parts[1]):
        return parts[1]

    return None
