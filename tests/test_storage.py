"""Tests for local persistence."""

import json

from creative_assistant.contracts.parser import parse_ideas, parse_script
from creative_assistant.session.storage import (
    IDEAS_KEY,
    USER_KEY,
    JsonFileStore,
    MemoryStore,
    UserProfile,
    load_ideas,
    load_user,
    save_ideas,
    save_user,
)

from helpers import idea_payload, script_payload


class TestJsonFileStore:
    """Tests for JsonFileStore."""

    def test_missing_key_is_none(self, tmp_path):
        assert JsonFileStore(tmp_path / "never-created").get(IDEAS_KEY) is None

    def test_set_get_delete(self, tmp_path):
        store = JsonFileStore(tmp_path / "state")
        store.set("k", "ค่า")
        assert store.get("k") == "ค่า"
        assert (tmp_path / "state" / "k.json").exists()
        store.delete("k")
        store.delete("k")
        assert store.get("k") is None

    def test_undecodable_file_is_none(self, tmp_path):
        (tmp_path / f"{IDEAS_KEY}.json").write_bytes(b"\xff\xfe[]")
        store = JsonFileStore(tmp_path)
        assert store.get(IDEAS_KEY) is None
        assert load_ideas(store) == []

    def test_unreadable_user_file_is_logged_out(self, tmp_path):
        (tmp_path / f"{USER_KEY}.json").write_bytes(b"\xff\xfe{}")
        assert load_user(JsonFileStore(tmp_path)) is None


class TestIdeaSnapshot:
    """Tests for save_ideas / load_ideas."""

    def test_round_trip_with_image_and_script(self):
        store = MemoryStore()
        ideas = parse_ideas(idea_payload(2))
        ideas[0] = ideas[0].model_copy(
            update={"image_url": "data:image/jpeg;base64,AAAA", "script": parse_script(script_payload(2))}
        )
        save_ideas(store, ideas)
        assert load_ideas(store) == ideas

    def test_snapshot_uses_camel_case(self):
        store = MemoryStore()
        save_ideas(store, parse_ideas(idea_payload(1)))
        saved = json.loads(store.get(IDEAS_KEY))[0]
        assert {"id", "conceptName", "shortPlot", "visualAudioDirection", "hook", "imageUrl"} <= set(saved)

    def test_unreadable_snapshot(self):
        store = MemoryStore({IDEAS_KEY: json.dumps([{"conceptName": "no id"}])})
        assert load_ideas(store) == []

    def test_empty_store(self):
        assert load_ideas(MemoryStore()) == []


class TestUserSnapshot:
    """Tests for save_user / load_user."""

    def test_round_trip(self):
        store = MemoryStore()
        save_user(store, UserProfile(user="Nok", email="nok@example.com"))
        assert load_user(store) == UserProfile(user="Nok", email="nok@example.com")

    def test_absent(self):
        assert load_user(MemoryStore()) is None
