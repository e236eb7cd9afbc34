import logging

import pytest

from presetworks.logging_utils import configure_logging, resolve_level


def test_configure_logging_honours_env_override(monkeypatch, tmp_path):
    target_dir = tmp_path / "logs"
    monkeypatch.setenv("PRESETWORKS_LOG_DIR", str(target_dir))

    log_path = configure_logging("unit_test", include_console=False)
    logging.getLogger(__name__).info("env override works")

    assert log_path == target_dir / "unit_test.log"
    assert log_path.exists()
    assert "env override works" in log_path.read_text()


def test_configure_logging_replaces_previous_handlers(tmp_path):
    first_dir = tmp_path / "logs"
    second_dir = tmp_path / "alt_logs"

    first_path = configure_logging("first_run", log_dir=first_dir, include_console=False)
    logging.getLogger(__name__).info("first run entry")
    assert first_path == first_dir / "first_run.log"
    assert "first run entry" in first_path.read_text()

    second_path = configure_logging("second_run", log_dir=second_dir, include_console=False)
    logging.getLogger(__name__).info("second run entry")
    assert second_path == second_dir / "second_run.log"
    assert "second run entry" in second_path.read_text()

    # The first log must not receive entries after reconfiguration
    assert "second run entry" not in first_path.read_text()


def test_level_accepts_names_and_env_default(monkeypatch):
    assert resolve_level("DEBUG") == logging.DEBUG
    assert resolve_level(logging.ERROR) == logging.ERROR

    monkeypatch.delenv("PRESETWORKS_LOG_LEVEL", raising=False)
    assert resolve_level(None) == logging.INFO

    monkeypatch.setenv("PRESETWORKS_LOG_LEVEL", "warning")
    assert resolve_level(None) == logging.WARNING


def test_unknown_level_name_is_rejected():
    with pytest.raises(ValueError, match="Choose from"):
        resolve_level("loud")


def test_suppressed_loggers_only_pass_warnings(tmp_path):
    noisy = logging.getLogger("presetworks_tests.noisy")
    try:
        log_path = configure_logging(
            "suppressed",
            level="debug",
            log_dir=tmp_path,
            include_console=False,
            suppressed_loggers=("presetworks_tests.noisy",),
        )
        noisy.info("per-request chatter")
        noisy.warning("worth keeping")
        logging.getLogger(__name__).debug("debug still on")

        text = log_path.read_text()
        assert "per-request chatter" not in text
        assert "worth keeping" in text
        assert "debug still on" in text
    finally:
        noisy.setLevel(logging.NOTSET)
