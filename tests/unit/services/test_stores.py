"""
Unit tests for the JSON key-value store and the stores built on it.
"""

import json
import math

import pytest
from pydantic import ValidationError

from timesheet_extractor.services.key_value_store import JsonKeyValueStore, open_store
from timesheet_extractor.services.preference_stores import (
    CredentialStore,
    WageStore,
    validate_api_key,
)
from timesheet_extractor.services.roster_store import EMPLOYEES_STORAGE_KEY, RosterStore


@pytest.fixture
def kv(tmp_path):
    """Store backed by a file in a temp directory."""
    return JsonKeyValueStore(tmp_path / "data" / "store.json")


class TestJsonKeyValueStore:
    """Tests for JsonKeyValueStore."""

    def test_missing_file_is_empty(self, kv):
        """Test reading before anything was written."""
        assert kv.get("anything") is None
        assert kv.get("anything", 5) == 5

    def test_set_and_get(self, kv):
        """Test that values survive a new store instance."""
        kv.set("hourly-wage", 12.5)

        assert JsonKeyValueStore(kv.path).get("hourly-wage") == 12.5

    def test_file_content_is_json_object(self, kv):
        """Test the on-disk format."""
        kv.set("a", [1, 2])

        assert json.loads(kv.path.read_text(encoding="utf-8")) == {"a": [1, 2]}

    def test_delete(self, kv):
        """Test deleting a key and deleting a missing key."""
        kv.set("a", 1)
        kv.delete("a")
        kv.delete("never-set")

        assert kv.get("a") is None

    def test_corrupted_file_is_empty(self, kv, caplog):
        """Test that corrupted JSON is logged and treated as empty."""
        kv.path.parent.mkdir(parents=True)
        kv.path.write_text("{not json", encoding="utf-8")

        assert kv.get("a") is None
        assert "corrupted JSON" in caplog.text

    def test_non_object_file_is_empty(self, kv):
        """Test that a JSON list is ignored."""
        kv.path.parent.mkdir(parents=True)
        kv.path.write_text("[1, 2]", encoding="utf-8")

        assert kv.get("a") is None

    def test_no_temp_files_left(self, kv):
        """Test that the atomic write cleans up."""
        kv.set("a", 1)
        kv.set("b", 2)

        assert [p.name for p in kv.path.parent.iterdir()] == ["store.json"]

    def test_open_store_uses_config(self, test_config):
        """Test that the configured store file is used by default."""
        assert open_store().path == test_config.store_file


class TestRosterStore:
    """Tests for RosterStore."""

    def test_add_and_list(self, kv):
        """Test adding employees in order."""
        roster = RosterStore(kv, clock=lambda: 1700000000000)

        anna = roster.add("  Anna Schmidt ")
        ben = roster.add("Ben")

        assert anna.name == "Anna Schmidt"
        assert [e.name for e in roster.list()] == ["Anna Schmidt", "Ben"]
        assert anna.id == "1700000000000"
        assert ben.id == "1700000000001"

    def test_stored_under_roster_key(self, kv):
        """Test the storage key and record format."""
        RosterStore(kv, clock=lambda: 42).add("Anna")

        assert kv.get(EMPLOYEES_STORAGE_KEY) == [{"id": "42", "name": "Anna"}]

    def test_blank_name_rejected(self, kv):
        """Test that blank names are not stored."""
        roster = RosterStore(kv)

        with pytest.raises(ValidationError):
            roster.add("   ")
        assert roster.list() == []

    def test_update(self, kv):
        """Test renaming an employee."""
        roster = RosterStore(kv)
        employee = roster.add("Anna")

        roster.update(employee.id, " Anna Schmidt ")

        assert roster.list()[0].name == "Anna Schmidt"
        assert roster.list()[0].id == employee.id

    def test_update_unknown_id_is_noop(self, kv):
        """Test that unknown ids are ignored on update."""
        roster = RosterStore(kv)
        roster.add("Anna")

        roster.update("does-not-exist", "Ben")

        assert [e.name for e in roster.list()] == ["Anna"]

    def test_remove(self, kv):
        """Test removing an employee."""
        roster = RosterStore(kv, clock=iter(range(100, 200)).__next__)
        anna = roster.add("Anna")
        roster.add("Ben")

        roster.remove(anna.id)

        assert [e.name for e in roster.list()] == ["Ben"]

    def test_remove_unknown_id_is_noop(self, kv):
        """Test that unknown ids are ignored on remove."""
        roster = RosterStore(kv)
        roster.add("Anna")

        roster.remove("does-not-exist")

        assert len(roster.list()) == 1

    def test_invalid_records_skipped(self, kv):
        """Test that broken records in the file are ignored."""
        kv.set(EMPLOYEES_STORAGE_KEY, [{"id": "1", "name": "Anna"}, {"id": "2"}])

        assert [e.name for e in RosterStore(kv).list()] == ["Anna"]


class TestCredentialStore:
    """Tests for CredentialStore."""

    def test_unset(self, kv):
        """Test that no key gives None."""
        assert CredentialStore(kv).get() is None

    def test_set_trims(self, kv):
        """Test that keys are stored trimmed."""
        store = CredentialStore(kv)

        store.set("  sk-abc123  ")

        assert store.get() == "sk-abc123"

    @pytest.mark.parametrize("key", ["", "   ", "pk-abc", "abc"])
    def test_invalid_keys(self, kv, key):
        """Test that blank keys and keys without sk- are rejected."""
        with pytest.raises(ValueError):
            CredentialStore(kv).set(key)
        assert CredentialStore(kv).get() is None

    def test_delete(self, kv):
        """Test deleting the key."""
        store = CredentialStore(kv)
        store.set("sk-abc")

        store.delete()

        assert store.get() is None

    def test_validate_api_key(self):
        """Test the validator directly."""
        assert validate_api_key(" sk-x ") == "sk-x"


class TestWageStore:
    """Tests for WageStore."""

    def test_default_zero(self, kv):
        """Test the default wage."""
        assert WageStore(kv).get() == 0.0

    def test_set_and_get(self, kv):
        """Test storing a wage."""
        store = WageStore(kv)
        store.set(15.5)

        assert store.get() == 15.5

    def test_zero_allowed(self, kv):
        """Test that zero is a valid wage."""
        store = WageStore(kv)
        store.set(0)

        assert store.get() == 0.0

    @pytest.mark.parametrize("wage", [-0.01, math.nan, "abc"])
    def test_invalid_wages(self, kv, wage):
        """Test that negative, NaN and non-numeric wages are rejected."""
        with pytest.raises(ValueError):
            WageStore(kv).set(wage)
