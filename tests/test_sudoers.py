"""
Tests for sudoview Sudoers Module
"""

import pytest

from sudoview.errors import GroupParseError, SourceNotFoundError
from sudoview.sudoers import load_sudoers, parse_group_members, parse_group_records


class TestParseGroupMembers:
    """Tests for single group records."""

    def test_sudo_group(self):
        assert parse_group_members("sudo:x:27:alice,bob") == ["alice", "bob"]

    def test_unrelated_group(self):
        assert parse_group_members("adm:x:4:syslog,alice") == []

    def test_group_name_substring(self):
        """Any group whose name contains "sudo" counts."""
        assert parse_group_members("sudoers-extra:x:1001:dave") == ["dave"]

    def test_empty_member_list(self):
        assert parse_group_members("sudo:x:27:") == []

    def test_too_few_fields(self):
        """Records without a member field are skipped."""
        assert parse_group_members("sudo:x:27") == []

    def test_members_field_only_checked_on_name(self):
        """A member called sudo in another group does not make it privileged."""
        assert parse_group_members("wheel:x:10:sudo") == []

    def test_trailing_newline_and_spaces(self):
        assert parse_group_members("sudo:x:27:alice, bob\n") == ["alice", "bob"]

    def test_custom_group_substring(self):
        assert parse_group_members("wheel:x:10:root,eve", "wheel") == ["root", "eve"]


class TestParseGroupRecords:
    """Tests for unioning groups."""

    def test_union_of_groups(self):
        records = ["sudo:x:27:alice,bob", "sudo-admins:x:28:bob,carol"]
        assert parse_group_records(records) == {"alice", "bob", "carol"}

    def test_result_is_immutable(self):
        assert isinstance(parse_group_records(["sudo:x:27:alice"]), frozenset)


class TestLoadSudoers:
    """Tests for load_sudoers."""

    def test_load_group_file(self, group_file):
        assert load_sudoers(group_file) == {"alice", "bob", "dave"}

    def test_simple_sudo_record(self, temp_directory):
        path = temp_directory / "group"
        path.write_text("sudo:x:27:alice,bob\n")

        assert load_sudoers(path) == {"alice", "bob"}

    def test_missing_file(self, temp_directory):
        with pytest.raises(SourceNotFoundError):
            load_sudoers(temp_directory / "missing")

    def test_undecodable_file(self, temp_directory):
        path = temp_directory / "group"
        path.write_bytes(b"sudo:x:27:\xff\xfe\n")

        with pytest.raises(GroupParseError):
            load_sudoers(path)
