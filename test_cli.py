"""
Tests for the command-line entry point and its exit status.
"""

import logging

import pytest
import requests

from chaosgrab import cli
from chaosgrab.core.controller import RunConfig
from conftest import build_zip

INDEX_URL = "https://index.test/index.json"


@pytest.fixture(autouse=True)
def reset_app_logger():
    yield
    app_logger = logging.getLogger("chaosgrab")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def patched_session(monkeypatch, session):
    monkeypatch.setattr(requests, "Session", lambda: session)
    return session


def make_config(tmp_path):
    return RunConfig(
        index_url=INDEX_URL,
        workspace_dir=str(tmp_path / "AllChaosData"),
        output_dir=str(tmp_path),
    )


def test_entry_failures_do_not_change_exit_status(tmp_path, patched_session):
    patched_session.add_json(INDEX_URL, [
        {"name": "ok", "URL": "https://files.test/ok.zip"},
        {"name": "gone", "URL": "https://files.test/gone.zip"},
    ])
    patched_session.add("https://files.test/ok.zip", build_zip([("ok.txt", b"ok")]))

    assert cli.main(make_config(tmp_path)) == 0
    assert (tmp_path / "everything.txt").read_bytes() == b"ok\n"
    assert patched_session.closed


def test_fatal_error_exits_non_zero(tmp_path, patched_session, capsys):
    assert cli.main(make_config(tmp_path)) == 1
    assert "error fetching index" in capsys.readouterr().err


def test_log_dir_writes_log_file(tmp_path, patched_session):
    patched_session.add_json(INDEX_URL, [])
    config = make_config(tmp_path)
    config.log_dir = str(tmp_path / "logs")

    assert cli.main(config) == 0
    assert (tmp_path / "logs" / "chaosgrab.log").exists()
