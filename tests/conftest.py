import socket
import threading
import time
from optparse import Values

import pytest

from masterstat.config import config, LOG_PRINT
from masterstat.protocol import encode_response


class FakeMaster:
    """A master on 127.0.0.1 that answers every datagram with `response`
    after `delay` seconds, or never answers if response is None."""

    def __init__(self, response=None, delay=0.0):
        self.response = response
        self.delay = delay
        self.requests = []
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.sock.bind(("127.0.0.1", 0))
        self.sock.settimeout(0.05)
        self.port = self.sock.getsockname()[1]
        self.address = "127.0.0.1:{0}".format(self.port)
        self.stopped = threading.Event()
        self.thread = threading.Thread(target=self.serve, daemon=True)
        self.thread.start()

    def serve(self):
        while not self.stopped.is_set():
            try:
                data, peer = self.sock.recvfrom(4096)
            except socket.timeout:
                continue
            except OSError:
                return
            self.requests.append(data)
            if self.response is None:
                continue
            if self.delay:
                time.sleep(self.delay)
            self.sock.sendto(self.response, peer)

    def close(self):
        self.stopped.set()
        self.thread.join(timeout=2.0)
        self.sock.close()


@pytest.fixture
def fake_master():
    """Factory for FakeMaster instances, all closed at teardown.

    fake_master(addresses) answers with a well-formed list,
    fake_master(raw=b'...') answers with raw bytes,
    fake_master() never answers.
    """
    masters = []

    def make(addresses=None, raw=None, delay=0.0):
        if raw is None and addresses is not None:
            raw = encode_response(addresses)
        master = FakeMaster(raw, delay)
        masters.append(master)
        return master

    yield make
    for master in masters:
        master.close()


@pytest.fixture
def unused_port():
    """A UDP port on 127.0.0.1 that nothing is listening on."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture(autouse=True)
def quiet_config(monkeypatch):
    """Every test starts from the default verbosity and a clean
    environment."""
    monkeypatch.setattr(config, "options", Values({"verbose": LOG_PRINT}))
    monkeypatch.setattr(config, "masters", [])
    for name in ("MASTERSTAT_MASTERS", "MASTERSTAT_TIMEOUT",
                 "MASTERSTAT_FORMAT"):
        monkeypatch.delenv(name, raising=False)
