import pytest

from csv_utility.adapters import LocalFileStore, MemoryAssetStore, ScriptedDialogs


@pytest.fixture
def files(tmp_path):
    return LocalFileStore(tmp_path / "files")


def test_write_and_read(files):
    files.write_text("data/out.csv", 'a,"b\nc"\n')
    assert files.read_bytes("data/out.csv") == b'a,"b\nc"\n'


def test_missing_file(files):
    with pytest.raises(FileNotFoundError):
        files.read_bytes("nope.csv")


def test_path_traversal(files):
    with pytest.raises(ValueError):
        files.write_text("../escape.csv", "x")
    with pytest.raises(ValueError):
        files.read_bytes("/etc/passwd")


def test_memory_store_find_and_load():
    store = MemoryAssetStore()
    obj = object()
    store.create(obj, "Assets/A/x.asset", "Thing")
    store.create(object(), "Assets/AB/y.asset", "Thing")
    store.create(object(), "Assets/A/z.asset", "Other")

    assert store.find("Thing", "Assets/A") == ["Assets/A/x.asset"]
    assert store.find("Thing", "Assets/A/") == ["Assets/A/x.asset"]
    assert store.load("Assets/A/x.asset", "Thing") is obj
    assert store.load("Assets/A/x.asset", "Other") is None
    assert store.load("Assets/missing.asset") is None
    assert store.path_of(obj) == "Assets/A/x.asset"
    assert store.path_of(object()) == ""


def test_memory_store_unique_path():
    store = MemoryAssetStore()
    assert store.unique_path("Assets/x.asset") == "Assets/x.asset"
    store.create(object(), "Assets/x.asset", "Thing")
    store.create(object(), "Assets/x 1.asset", "Thing")
    assert store.unique_path("Assets/x.asset") == "Assets/x 2.asset"
    with pytest.raises(FileExistsError):
        store.create(object(), "Assets/x.asset", "Thing")


def test_scripted_dialogs_default_to_cancel():
    dialogs = ScriptedDialogs(open_paths=["a.csv"], confirmations=[True])
    assert dialogs.open_file("Open", "csv") == "a.csv"
    assert dialogs.open_file("Open", "csv") == ""
    assert dialogs.save_file("Save", "data.csv", "csv") == ""
    assert dialogs.confirm("Sure?", "msg") is True
    assert dialogs.confirm("Sure?", "msg") is False
    dialogs.alert("Title", "Body")
    assert dialogs.alerts == [("Title", "Body")]
