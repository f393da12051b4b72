import pytest

from masterstat.addr import MasterAddr, ServerAddress
from masterstat.utils import stringtomaster, valid_port


def test_master_from_string():
    master = MasterAddr("master.quakeworld.nu:27000")
    assert master == ("master.quakeworld.nu", 27000)
    assert master.host == "master.quakeworld.nu"
    assert master.port == 27000
    assert str(master) == "master.quakeworld.nu:27000"


def test_master_default_port():
    assert MasterAddr("qwmaster.fodquake.net") == ("qwmaster.fodquake.net",
                                                  27000)


def test_master_from_pair_and_args():
    assert MasterAddr(("10.0.0.1", "27001")) == ("10.0.0.1", 27001)
    assert MasterAddr("10.0.0.1", 27001) == ("10.0.0.1", 27001)


def test_master_passthrough():
    master = MasterAddr("localhost:1")
    assert MasterAddr(master) is master


@pytest.mark.parametrize("bad", [
    "host:0",
    "host:65536",
    "host:port",
    ":27000",
    "bad host:27000",
    "",
])
def test_master_invalid(bad):
    with pytest.raises(ValueError):
        MasterAddr(bad)


def test_stringtomaster():
    assert stringtomaster("  example.org:1234 \n", 27000) == ("example.org",
                                                             1234)
    assert stringtomaster("example.org", 5) == ("example.org", 5)


def test_valid_port():
    assert valid_port("65535") == 65535
    with pytest.raises(ValueError):
        valid_port(None)


def test_server_address_value_semantics():
    a = ServerAddress("192.168.1.1", 30000)
    assert a == ServerAddress("192.168.1.1", 30000)
    assert a != ServerAddress("192.168.1.1", 30001)
    assert hash(a) == hash(ServerAddress("192.168.1.1", 30000))
    assert str(a) == "192.168.1.1:30000"
    assert a.packed() == bytes([192, 168, 1, 1, 0x75, 0x30])


def test_server_address_ordering():
    addresses = [ServerAddress("192.168.1.4", 1),
                 ServerAddress("192.168.1.1", 2),
                 ServerAddress("192.168.1.1", 1)]
    assert sorted(addresses) == [ServerAddress("192.168.1.1", 1),
                                 ServerAddress("192.168.1.1", 2),
                                 ServerAddress("192.168.1.4", 1)]
