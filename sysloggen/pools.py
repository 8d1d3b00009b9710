# sysloggen/pools.py
"""Message, hostname and source address pools loaded from line files."""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .exceptions import ResourceUnavailable

logger = logging.getLogger(__name__)

# Warning shown when a file opens fine but has nothing in it
EMPTY_POOL_FALLBACKS = {
    'message': "Will generate random messages for the message body.",
    'host': "Will use 'myhost' as hostname.",
    'source IP': "Will use OS-assigned source IP.",
}


def load_pool(kind: str, path: Optional[str]) -> Tuple[str, ...]:
    """Read one entry per line from ``path``.

    Only the line terminator is stripped, so a blank line is kept as an
    empty-string entry. ``None`` means no file was given and yields an
    empty pool.
    """
    if path is None:
        return ()

    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            entries = tuple(line.rstrip('\n') for line in f)
    except OSError as e:
        raise ResourceUnavailable(kind, path, e.strerror or str(e)) from e

    if not entries:
        fallback = EMPTY_POOL_FALLBACKS.get(kind, "Falling back to defaults.")
        label = kind[:1].upper() + kind[1:]
        logger.warning(f"{label} file is empty: {path}. {fallback}")
    else:
        logger.debug(f"Loaded {len(entries)} {kind} entries from {path}")

    return entries


@dataclass(frozen=True)
class ContentPools:
    """Read-only pools shared by every worker."""
    messages: Tuple[str, ...] = ()
    hostnames: Tuple[str, ...] = ()
    source_addresses: Tuple[str, ...] = ()

    @classmethod
    def load(
        cls,
        message_file: Optional[str] = None,
        host_file: Optional[str] = None,
        source_ip_file: Optional[str] = None,
    ) -> 'ContentPools':
        """Load all three pools; missing paths give empty pools."""
        return cls(
            messages=load_pool('message', message_file),
            hostnames=load_pool('host', host_file),
            source_addresses=load_pool('source IP', source_ip_file),
        )
