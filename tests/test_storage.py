from pathlib import Path

from taskflow_client.storage import TokenStore


def test_token_round_trip(tmp_path: Path):
    store = TokenStore(tmp_path / "data")
    assert store.load() is None
    store.save("abc")
    assert store.load() == "abc"
    store.clear()
    assert store.load() is None
    store.clear()


def test_unreadable_token_file_is_ignored(tmp_path: Path):
    (tmp_path / "auth.json").write_text("{not json")
    assert TokenStore(tmp_path).load() is None
