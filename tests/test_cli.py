import json

import pytest
from stevedore.extension import Extension, ExtensionManager

from masterstat import cli, formatters, ServerAddress
from masterstat.config import config
from masterstat.formatters.json_output import JSONFormatter
from masterstat.formatters.text import TextFormatter

ADDR1 = ServerAddress("10.0.0.1", 27500)
ADDR2 = ServerAddress("10.0.0.2", 27500)


@pytest.fixture(autouse=True)
def setup(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    manager = ExtensionManager.make_test_instance(
        [Extension("text", None, TextFormatter, None),
         Extension("json", None, JSONFormatter, None)],
        namespace=formatters.NAMESPACE)
    monkeypatch.setattr(formatters, "formatter_manager", lambda: manager)


def test_prints_addresses(fake_master, capsys):
    a = fake_master([ADDR2, ADDR1])
    b = fake_master([ADDR1])
    status = cli.main(["-t", "1", a.address, b.address])
    out = capsys.readouterr().out
    assert status == 0
    assert out == "10.0.0.2:27500\n10.0.0.1:27500\n10.0.0.1:27500\n"


def test_unique_json(fake_master, capsys):
    a = fake_master([ADDR2, ADDR1])
    b = fake_master([ADDR1])
    status = cli.main(["-t", "1", "-u", "-f", "json", a.address, b.address])
    assert status == 0
    assert json.loads(capsys.readouterr().out) == ["10.0.0.1:27500",
                                                   "10.0.0.2:27500"]


def test_failed_master_is_reported(fake_master, capsys):
    good = fake_master([ADDR1])
    silent = fake_master()
    status = cli.main(["-t", "0.3", good.address, silent.address])
    captured = capsys.readouterr()
    assert status == 0
    assert captured.out == "10.0.0.1:27500\n"
    assert "Warning: {0} failed (Timeout)".format(silent.address) in captured.err


def test_no_master_answered(fake_master, capsys):
    silent = fake_master()
    status = cli.main(["-t", "0.2", silent.address])
    captured = capsys.readouterr()
    assert status == 1
    assert captured.out == ""
    assert "no master answered" in captured.err


def test_masters_from_environment(fake_master, capsys, monkeypatch):
    a = fake_master([ADDR1])
    monkeypatch.setenv("MASTERSTAT_MASTERS", a.address)
    assert cli.main(["-t", "1"]) == 0
    assert capsys.readouterr().out == "10.0.0.1:27500\n"


def test_masters_from_dotenv(fake_master, capsys, monkeypatch, tmp_path):
    a = fake_master([ADDR2])
    (tmp_path / ".env").write_text(
        "MASTERSTAT_MASTERS={0}\nMASTERSTAT_FORMAT=json\n".format(a.address))
    # load_dotenv writes straight into os.environ
    monkeypatch.setenv("MASTERSTAT_MASTERS", "")
    monkeypatch.delenv("MASTERSTAT_MASTERS")
    monkeypatch.setenv("MASTERSTAT_FORMAT", "")
    monkeypatch.delenv("MASTERSTAT_FORMAT")
    assert cli.main(["-t", "1"]) == 0
    assert json.loads(capsys.readouterr().out) == ["10.0.0.2:27500"]


def test_config_error(capsys):
    assert cli.main(["-t", "-1"]) == 1
    assert "Timeout must be positive" in capsys.readouterr().err


def test_unknown_format(capsys):
    assert cli.main(["-f", "yaml", "localhost:27000"]) == 1
    assert "no formatter named 'yaml'" in capsys.readouterr().err


def test_verbose_logging(fake_master, capsys):
    a = fake_master([ADDR1])
    assert cli.main(["-v", "-t", "1", a.address]) == 0
    err = capsys.readouterr().err
    assert "1 server addresses" in err
    assert "1 of 1 masters answered" in err
    assert config.verbose == 3
