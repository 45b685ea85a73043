import logging

from gstmatch.runtime import default_arch, log_level


def test_default_arch_from_env(monkeypatch):
    monkeypatch.delenv("GSTMATCH_ARCH", raising=False)
    assert default_arch() == ""
    monkeypatch.setenv("GSTMATCH_ARCH", " amd64 ")
    assert default_arch() == "amd64"


def test_log_level_parsing(monkeypatch, caplog):
    monkeypatch.setenv("GSTMATCH_LOG_LEVEL", "debug")
    assert log_level() == logging.DEBUG

    monkeypatch.setenv("GSTMATCH_LOG_LEVEL", "chatty")
    with caplog.at_level(logging.WARNING, logger="gstmatch"):
        assert log_level() == logging.WARNING
    assert "Invalid log level" in caplog.text

    monkeypatch.delenv("GSTMATCH_LOG_LEVEL")
    assert log_level(logging.INFO) == logging.INFO
