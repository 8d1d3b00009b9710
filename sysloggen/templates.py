# sysloggen/templates.py
"""Syslog record synthesis and RFC 3164 timestamps."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from faker import Faker

from .pools import ContentPools

# Fixed identity of this generator: LOG_USER / LOG_ERR
FACILITY = 1
SEVERITY = 3
PRIORITY = (FACILITY * 8) + SEVERITY

APP_TAG = "sysloggen"
DEFAULT_HOSTNAME = "myhost"

RANDOM_BODY_LENGTH = 50
RANDOM_BODY_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz "

# strftime('%b') follows the process locale; receivers expect English
MONTHS = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
          'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')


def format_timestamp(instant: Optional[datetime] = None) -> str:
    """Format ``instant`` (default: now, local time) as ``Mmm dd HH:MM:SS``.

    The day of month is padded with a space, not a zero: ``Jul  2 10:18:14``.
    """
    if instant is None:
        instant = datetime.now()
    return f"{MONTHS[instant.month - 1]} {instant.day:>2} {instant:%H:%M:%S}"


@dataclass
class LogRecord:
    """A single syslog record, built per send and then discarded."""
    priority: int
    timestamp: str
    hostname: str
    tag: str
    body: str

    def to_wire(self) -> str:
        """Serialize to ``<PRI>TIMESTAMP HOSTNAME TAG: MESSAGE`` plus newline."""
        return f"<{self.priority}>{self.timestamp} {self.hostname} {self.tag}: {self.body}\n"


class MessageSynthesizer:
    """Build log records from the content pools.

    Each instance seeds its own Faker generator, so workers that hold one
    synthesizer each never share random state.
    """
    
    def __init__(self, pools: ContentPools, fake: Optional[Faker] = None):
        self.pools = pools
        if fake is None:
            fake = Faker()
            fake.seed_instance()
        self.fake = fake
    
    @property
    def random(self):
        """The generator backing this synthesizer."""
        return self.fake.random
    
    def random_body(self, length: int = RANDOM_BODY_LENGTH) -> str:
        """Random text drawn from the alphanumeric-plus-space alphabet."""
        return ''.join(self.fake.random_choices(RANDOM_BODY_ALPHABET, length=length))
    
    def pick(self, pool):
        """Uniform choice from a non-empty pool."""
        return self.fake.random_element(pool)
    
    def synthesize(self, instant: Optional[datetime] = None) -> LogRecord:
        """Produce one fully populated record."""
        if self.pools.messages:
            body = self.pick(self.pools.messages)
        else:
            body = self.random_body()
        
        if self.pools.hostnames:
            hostname = self.pick(self.pools.hostnames)
        else:
            hostname = DEFAULT_HOSTNAME
        
        return LogRecord(
            priority=PRIORITY,
            timestamp=format_timestamp(instant),
            hostname=hostname,
            tag=APP_TAG,
            body=body,
        )
