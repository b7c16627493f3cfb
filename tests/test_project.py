# SPDX-License-Identifier: MIT

import pytest

from sheetshark.errors import UnknownProjectError
from sheetshark.service.project import ProjectDirectory


def test_resolve_known_and_unknown(directory):
    assert directory.resolve("M") == {
        "key": "M",
        "internal_name": "Maintenance",
        "issue_tracker_url": "https://jira.example.com/",
    }
    assert directory.resolve("D")["issue_tracker_url"] is None
    assert directory.resolve("NOPE") is None


def test_break_key_resolves_without_configuration():
    directory = ProjectDirectory({})

    assert directory.resolve("x") == {
        "key": "x",
        "internal_name": "Break",
        "issue_tracker_url": None,
    }
    assert not directory.is_configured("x")


def test_configured_break_key_wins():
    directory = ProjectDirectory({"x": {"internal_name": "Pause"}})
    assert directory.resolve("x")["internal_name"] == "Pause"


def test_blank_key_uses_default(directory):
    assert directory.default_key() == "D"
    assert directory.effective_key("") == "D"
    assert directory.effective_key(None) == "D"
    assert directory.effective_key("M") == "M"
    assert directory.resolve_entry_project("")["internal_name"] == "Development"


@pytest.mark.parametrize("default_project_key", [None, "", "   "])
def test_no_usable_default(default_project_key):
    directory = ProjectDirectory({}, default_project_key=default_project_key)

    assert directory.default_key() is None
    with pytest.raises(UnknownProjectError) as exc_info:
        directory.resolve_entry_project("")
    assert exc_info.value.key == ""


def test_unknown_key_does_not_fall_back_to_default(directory):
    with pytest.raises(UnknownProjectError) as exc_info:
        directory.resolve_entry_project("NOPE")
    assert exc_info.value.key == "NOPE"


def test_directory_is_a_snapshot():
    projects = {"M": {"internal_name": "Maintenance"}}
    directory = ProjectDirectory(projects)

    projects["M"]["internal_name"] = "Changed"
    projects["N"] = {"internal_name": "New"}

    assert directory.resolve("M")["internal_name"] == "Maintenance"
    assert directory.resolve("N") is None
    assert directory.keys() == ["M"]


def test_resolved_project_cannot_change_the_directory(directory):
    directory.resolve("M")["internal_name"] = "Changed"
    assert directory.resolve("M")["internal_name"] == "Maintenance"
