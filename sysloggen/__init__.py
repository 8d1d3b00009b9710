# sysloggen/__init__.py
"""
sysloggen - Concurrent syslog traffic generator.

Sends RFC 3164-style syslog datagrams over UDP from a fixed pool of worker
threads, for load testing and fuzzing log ingestion pipelines. Source
addresses can be spoofed per message.
"""

__version__ = '1.0.0'

from .config import load_config, AppConfig
from .exceptions import (
    SyslogGenError,
    ConfigurationError,
    ResourceUnavailable,
    InvalidAddress,
)
from .generator import DispatchEngine, DispatchPlan, RunResult, RunStats, partition
from .pools import ContentPools, load_pool
from .senders import ConsoleEcho, DatagramSender, SendStatus, validate_address
from .templates import LogRecord, MessageSynthesizer, format_timestamp

__all__ = [
    'load_config',
    'AppConfig',
    'SyslogGenError',
    'ConfigurationError',
    'ResourceUnavailable',
    'InvalidAddress',
    'DispatchEngine',
    'DispatchPlan',
    'RunResult',
    'RunStats',
    'partition',
    'ContentPools',
    'load_pool',
    'ConsoleEcho',
    'DatagramSender',
    'SendStatus',
    'validate_address',
    'LogRecord',
    'MessageSynthesizer',
    'format_timestamp',
]
