"""
Tests for the workspace directory layout.
"""

import pytest

from chaosgrab.core.errors import WorkspaceError
from chaosgrab.utils.workspace import Workspace


def test_ensure_is_idempotent_and_keeps_content(tmp_path):
    workspace = Workspace(tmp_path / "AllChaosData")
    workspace.ensure()
    (workspace.root / "acme").mkdir()
    (workspace.root / "acme" / "hosts.txt").write_text("a.acme.test\n")

    workspace.ensure()

    assert (workspace.root / "acme" / "hosts.txt").read_text() == "a.acme.test\n"


def test_ensure_fails_when_root_is_a_file(tmp_path):
    blocker = tmp_path / "AllChaosData"
    blocker.write_text("in the way")

    with pytest.raises(WorkspaceError, match="Failed to create base directory"):
        Workspace(blocker).ensure()


def test_entry_dir_is_named_after_entry(tmp_path):
    workspace = Workspace(tmp_path)
    assert workspace.entry_dir("acme") == tmp_path / "acme"
    assert not (tmp_path / "acme").exists()

    created = workspace.create_entry_dir("acme")
    assert created.is_dir()
    assert workspace.create_entry_dir("acme") == created


@pytest.mark.parametrize("name", ["", ".", "..", "../elsewhere", "a/../../elsewhere"])
def test_entry_dir_rejects_names_outside_workspace(tmp_path, name):
    with pytest.raises(WorkspaceError):
        Workspace(tmp_path / "ws").entry_dir(name)
