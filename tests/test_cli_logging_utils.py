from pathlib import Path

from loguru import logger

import otrsrpc.cli.logging_utils as logging_utils
from otrsrpc.connection import ConnectionManager, Credentials


def test_ensure_rotating_log_file_adds_one_sink(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    monkeypatch.setattr(logging_utils, "_SINK_IDS", {})

    path = logging_utils.ensure_rotating_log_file("call", level="DEBUG")
    again = logging_utils.ensure_rotating_log_file("call")

    try:
        assert path == again == tmp_path / ".otrsrpc" / "logs" / "call.log"
        assert path.parent.is_dir()
        assert list(logging_utils._SINK_IDS) == ["call"]
    finally:
        logger.remove(logging_utils._SINK_IDS["call"])


def test_log_dir_env_override_and_package_filter(monkeypatch, tmp_path, factory) -> None:
    monkeypatch.setenv("OTRS_API_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setattr(logging_utils, "_SINK_IDS", {})

    path = logging_utils.ensure_rotating_log_file("call", level="DEBUG")
    logger.enable("otrsrpc")
    try:
        logger.info("unrelated application record")
        ConnectionManager(factory).ensure_connection(
            Credentials(location="http://host/otrs/", username="soap", password="pw")
        )
    finally:
        logger.disable("otrsrpc")
        logger.complete()
        logger.remove(logging_utils._SINK_IDS["call"])

    assert path == tmp_path / "logs" / "call.log"
    content = path.read_text(encoding="utf-8")
    assert "Connected to http://host/otrs/rpc.pl" in content
    assert "otrsrpc.connection:ensure_connection" in content
    assert "unrelated application record" not in content
