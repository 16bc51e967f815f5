from debt_walk.token_store import FileKeyValueStore, InMemoryKeyValueStore


def test_file_store_round_trip(tmp_path):
    path = tmp_path / "nested" / "session.json"
    store = FileKeyValueStore(path)

    store.set("stravaAccessToken", "abc")
    store.set("stravaRefreshToken", "def")

    reopened = FileKeyValueStore(path)
    assert reopened.get("stravaAccessToken") == "abc"
    assert reopened.get("stravaRefreshToken") == "def"
    assert reopened.get("missing") is None


def test_file_store_clear_removes_file(tmp_path):
    store = FileKeyValueStore(tmp_path / "session.json")
    store.set("k", "v")

    store.clear()
    store.clear()

    assert not (tmp_path / "session.json").exists()
    assert store.get("k") is None


def test_file_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")

    store = FileKeyValueStore(path)

    assert store.get("k") is None
    store.set("k", "v")
    assert store.get("k") == "v"


def test_in_memory_store():
    store = InMemoryKeyValueStore()
    store.set("k", "v")
    assert store.get("k") == "v"
    store.clear()
    assert store.get("k") is None
