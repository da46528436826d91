from gofire.cli import check_system, server
from gofire.hardware.outputs import HardwareFault

from .conftest import RecordingDriver


def test_startup_fault_exits_with_1(monkeypatch):
    def broken_driver():
        raise HardwareFault("Failed to request CH1 on GPIO26: busy")

    monkeypatch.setattr(server, "GpioOutputDriver", broken_driver)

    assert server.main([]) == 1


def test_bad_listen_address_exits_with_2(monkeypatch):
    monkeypatch.setattr(server, "GpioOutputDriver", RecordingDriver)

    assert server.main(["--listen_on", "nonsense"]) == 2


def test_server_runs_and_closes_driver(monkeypatch):
    driver = RecordingDriver()
    calls = {}

    def fake_run(self, **kwargs):
        calls.update(kwargs)

    monkeypatch.setattr(server, "GpioOutputDriver", lambda: driver)
    monkeypatch.setattr("flask.Flask.run", fake_run)

    assert server.main(["--listen_on", "127.0.0.1:8601"]) == 0
    assert calls["host"] == "127.0.0.1"
    assert calls["port"] == 8601
    assert calls["threaded"] is True
    assert driver.closed


def test_check_python_package(capsys):
    assert check_system.check_python_package("pytz") is True
    assert check_system.check_python_package("no-such-package", "no_such_package_xyz") is False
    out = capsys.readouterr().out
    assert "✅ pytz is installed" in out
    assert "❌ no-such-package is NOT installed" in out
