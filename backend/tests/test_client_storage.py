import json
import pytest
from tracker.client.storage import PLAYERS_KEY, USER_EMAIL_KEY, LocalStorage

def test_missing_file_reads_empty(tmp_path):
    s = LocalStorage(tmp_path / "nope.json")
    assert s.get_item(PLAYERS_KEY) is None
    assert s.load_list(PLAYERS_KEY) == []

def test_lists_are_stored_as_json_strings(storage):
    storage.save_list(PLAYERS_KEY, [{"id": "1", "name": "A"}])
    raw = json.loads(storage.path.read_text())
    assert isinstance(raw[PLAYERS_KEY], str)
    assert storage.load_list(PLAYERS_KEY) == [{"id": "1", "name": "A"}]

def test_set_get_remove_item(storage):
    storage.set_item(USER_EMAIL_KEY, "coach@ex.com")
    assert storage.get_item(USER_EMAIL_KEY) == "coach@ex.com"
    storage.remove_item(USER_EMAIL_KEY)
    assert storage.get_item(USER_EMAIL_KEY) is None
    storage.remove_item(USER_EMAIL_KEY)  # no-op

def test_unreadable_list_entry_is_discarded(storage):
    storage.set_item(PLAYERS_KEY, "{not json")
    assert storage.load_list(PLAYERS_KEY) == []
    storage.set_item(PLAYERS_KEY, '{"not": "a list"}')
    assert storage.load_list(PLAYERS_KEY) == []

def test_corrupt_file_raises(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("[1, 2")
    with pytest.raises(ValueError):
        LocalStorage(path).get_item(PLAYERS_KEY)
