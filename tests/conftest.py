"""Shared fixtures for the sysloggen tests."""

import io
import socket
import threading

import pytest

from sysloggen.senders import ConsoleEcho


class FakeSocket:
    """Records what a sender does with its socket."""

    def __init__(self, factory, family, type_):
        self.factory = factory
        self.family = family
        self.type = type_
        self.options = []
        self.bound = None
        self.sent = []
        self.closed = False

    def setsockopt(self, level, option, value):
        if self.factory.fail_setsockopt:
            raise OSError(1, "Operation not permitted")
        self.options.append((level, option, value))

    def bind(self, address):
        if self.factory.fail_bind:
            raise OSError(99, "Cannot assign requested address")
        self.bound = address

    def sendto(self, data, address):
        if self.factory.fail_sendto:
            raise OSError(101, "Network is unreachable")
        self.sent.append((data, address))
        self.factory.datagrams.append((data, address, self.bound))

    def close(self):
        if not self.closed:
            self.closed = True
            with self.factory.lock:
                self.factory.open_count -= 1


class FakeSocketFactory:
    """Callable drop-in for socket.socket that tracks open handles."""

    def __init__(self):
        self.sockets = []
        self.datagrams = []
        self.open_count = 0
        self.lock = threading.Lock()
        self.fail_create = False
        self.fail_setsockopt = False
        self.fail_bind = False
        self.fail_sendto = False

    def __call__(self, family=socket.AF_INET, type_=socket.SOCK_DGRAM):
        if self.fail_create:
            raise OSError(24, "Too many open files")
        sock = FakeSocket(self, family, type_)
        with self.lock:
            self.sockets.append(sock)
            self.open_count += 1
        return sock


@pytest.fixture
def socket_factory():
    return FakeSocketFactory()


@pytest.fixture
def console_stream():
    return io.StringIO()


@pytest.fixture
def console(console_stream):
    return ConsoleEcho(stream=console_stream)


@pytest.fixture
def write_lines(tmp_path):
    """Write a file from raw text and return its path as a string."""
    def _write(name, text):
        path = tmp_path / name
        path.write_text(text, encoding='utf-8')
        return str(path)
    return _write


@pytest.fixture
def udp_receiver():
    """A loopback UDP socket on an ephemeral port."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_RCVBUF, 1 << 20)
    sock.bind(('127.0.0.1', 0))
    sock.settimeout(2.0)
    yield sock
    sock.close()


@pytest.fixture
def drain():
    """Read up to ``expected`` datagrams from a socket."""
    def _drain(sock, expected, timeout=2.0):
        received = []
        sock.settimeout(timeout)
        while len(received) < expected:
            try:
                data, _ = sock.recvfrom(65535)
            except socket.timeout:
                break
            received.append(data.decode("utf-8"))
        return received
    return _drain
