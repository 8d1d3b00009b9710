# sysloggen/senders.py
"""Per-datagram UDP transmission and the console audit echo."""

import logging
import random
import socket
import sys
import threading
from enum import Enum
from typing import Callable, Optional, Sequence, TextIO, Tuple

from colorama import Fore, Style, init

from .exceptions import InvalidAddress
from .templates import LogRecord

# Initialize colorama for Windows compatibility
init(autoreset=True)

logger = logging.getLogger(__name__)

# Not exported by every Python build; this is the Linux value
IP_FREEBIND = getattr(socket, 'IP_FREEBIND', 15)

Destination = Tuple[str, int]


class SendStatus(Enum):
    """Outcome of a single send. Anything but SENT counts as a skipped send."""
    SENT = 'sent'
    SOCKET_FAILED = 'socket_failed'
    INVALID_SOURCE = 'invalid_source'
    BIND_FAILED = 'bind_failed'
    TRANSMIT_FAILED = 'transmit_failed'

    @property
    def ok(self) -> bool:
        return self is SendStatus.SENT


def validate_address(address: str, role: str = "destination") -> str:
    """Return ``address`` if it is a dotted-quad IPv4 address."""
    try:
        socket.inet_pton(socket.AF_INET, address)
    except (OSError, TypeError, ValueError) as e:
        raise InvalidAddress(address, role) from e
    return address


class ConsoleEcho:
    """Print each outgoing record, one whole line per write."""
    
    SEVERITY_COLORS = {
        0: Fore.MAGENTA + Style.BRIGHT,
        1: Fore.MAGENTA,
        2: Fore.RED + Style.BRIGHT,
        3: Fore.RED,
        4: Fore.YELLOW,
        5: Fore.CYAN,
        6: Fore.GREEN,
        7: Fore.WHITE + Style.DIM,
    }
    
    def __init__(self, stream: Optional[TextIO] = None, enabled: bool = True):
        self._stream = stream
        self.enabled = enabled
        self._lock = threading.Lock()
    
    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout
    
    def echo(self, record: LogRecord, wire: str) -> None:
        """Write ``Sending: <wire>`` coloured by the record severity."""
        if not self.enabled:
            return
        color = self.SEVERITY_COLORS.get(record.priority % 8, Fore.WHITE)
        text = wire.rstrip("\n")
        line = f"{color}Sending: {text}{Style.RESET_ALL}\n"
        with self._lock:
            self.stream.write(line)
            self.stream.flush()


class DatagramSender:
    """Send each record over its own short-lived UDP socket.

    A fresh socket per datagram lets every send bind to a different source
    address drawn from the source pool. The socket is closed on every path,
    including sends that are skipped because the source could not be bound.
    """
    
    def __init__(
        self,
        destination: Destination,
        source_address: Optional[str] = None,
        source_pool: Sequence[str] = (),
        console: Optional[ConsoleEcho] = None,
        socket_factory: Callable[..., socket.socket] = socket.socket,
    ):
        self.destination = destination
        self.source_address = source_address or None
        self.source_pool = tuple(source_pool)
        self.console = console if console is not None else ConsoleEcho()
        self.socket_factory = socket_factory
    
    def select_source(self, rng: Optional[random.Random] = None) -> Optional[str]:
        """Pick the source for one send: pool entry, fixed address, or None."""
        if self.source_pool:
            return (rng or random).choice(self.source_pool)
        return self.source_address
    
    def _bind_source(self, sock: socket.socket, source: str) -> Optional[SendStatus]:
        """Bind ``sock`` to ``source`` on an ephemeral port; returns a status only on failure."""
        try:
            validate_address(source, role="source")
        except InvalidAddress as e:
            logger.warning(f"{e}, skipping message")
            return SendStatus.INVALID_SOURCE
        
        try:
            sock.setsockopt(socket.IPPROTO_IP, IP_FREEBIND, 1)
        except OSError as e:
            # Binding may still succeed when the address is local
            logger.warning(f"Could not set IP_FREEBIND socket option: {e}")
        
        try:
            sock.bind((source, 0))
        except OSError as e:
            logger.warning(f"Could not bind socket to source IP {source}: {e}")
            return SendStatus.BIND_FAILED
        return None
    
    def send(self, record: LogRecord, rng: Optional[random.Random] = None) -> SendStatus:
        """Send one record. Failures are logged and reported, never raised."""
        wire = record.to_wire()
        
        try:
            sock = self.socket_factory(socket.AF_INET, socket.SOCK_DGRAM)
        except OSError as e:
            logger.warning(f"Could not create socket: {e}")
            return SendStatus.SOCKET_FAILED
        
        try:
            source = self.select_source(rng)
            if source:
                failure = self._bind_source(sock, source)
                if failure is not None:
                    return failure
            
            self.console.echo(record, wire)
            try:
                sock.sendto(wire.encode('utf-8'), self.destination)
            except OSError as e:
                logger.warning(f"UDP send error: {e}")
                return SendStatus.TRANSMIT_FAILED
            return SendStatus.SENT
        finally:
            sock.close()
