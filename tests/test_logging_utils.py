import json

from delve.logging_utils import get_logger


def test_level_filtering(monkeypatch, capsys):
    log = get_logger("delve.test")
    monkeypatch.setenv("DELVE_LOG_LEVEL", "info")
    log.debug(event="hidden")
    log.info(event="shown", rooms=3, note="two words")
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "level=info" in out
    assert "event=shown" in out
    assert "rooms=3" in out
    assert "note=two_words" in out
    assert "logger=delve.test" in out


def test_default_level_is_warn(monkeypatch, capsys):
    monkeypatch.delenv("DELVE_LOG_LEVEL", raising=False)
    log = get_logger("delve.test")
    log.info(event="quiet")
    log.warn(event="loud")
    out = capsys.readouterr().out
    assert "quiet" not in out
    assert "event=loud" in out


def test_errors_go_to_stderr(capsys):
    get_logger("delve.test").error(event="boom")
    captured = capsys.readouterr()
    assert "event=boom" in captured.err
    assert captured.out == ""


def test_json_mode(monkeypatch, capsys):
    monkeypatch.setenv("DELVE_LOG_LEVEL", "debug")
    monkeypatch.setenv("DELVE_LOG_JSON", "1")
    get_logger("delve.test").debug(event="tick", damage=2, skipped=None)
    rec = json.loads(capsys.readouterr().out.strip())
    assert rec["event"] == "tick"
    assert rec["damage"] == 2
    assert rec["level"] == "debug"
    assert "skipped" not in rec
    assert isinstance(rec["ts"], int)


def test_loggers_are_cached():
    assert get_logger("delve.same") is get_logger("delve.same")


def test_bind_adds_context_fields(monkeypatch, capsys):
    monkeypatch.setenv("DELVE_LOG_LEVEL", "warn")
    base = get_logger("delve.bound")
    seeded = base.bind(seed=42)
    seeded.warn(event="repaired", region_count=3)
    out = capsys.readouterr().out
    assert "seed=42" in out and "region_count=3" in out
    assert seeded is not base
    assert base.context == {}
