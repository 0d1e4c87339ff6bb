import pytest

from errors import ValidationError
from store import JOB_DESCRIPTIONS_KEY, JobDescriptionStore, LocalStorage, ThemePreference


@pytest.fixture
def storage(tmp_path):
    return LocalStorage.from_url(f"sqlite:///{tmp_path / 'test.db'}")


def test_storage_round_trips_json(storage):
    assert storage.get("missing", default=[]) == []
    storage.set("k", {"a": [1, 2]})
    assert storage.get("k") == {"a": [1, 2]}


def test_add_list_delete_job_descriptions(storage):
    jobs = JobDescriptionStore(storage)
    first = jobs.add("  Data Engineer ", " Spark ")
    second = jobs.add("ML Engineer", "PyTorch")

    assert first.title == "Data Engineer" and first.description == "Spark"
    assert [j.id for j in jobs.list()] == [second.id, first.id]
    assert jobs.get(first.id) == first

    assert jobs.delete(first.id) is True
    assert jobs.delete(first.id) is False
    assert [j.id for j in jobs.list()] == [second.id]


def test_job_descriptions_persist_under_fixed_key(storage):
    JobDescriptionStore(storage).add("QA", "Testing")
    raw = storage.get(JOB_DESCRIPTIONS_KEY)
    assert raw[0]["title"] == "QA"
    assert set(raw[0]) == {"id", "title", "description"}


def test_blank_job_description_is_rejected(storage):
    with pytest.raises(ValidationError):
        JobDescriptionStore(storage).add("Title", "   ")


def test_corrupt_collection_is_ignored(storage):
    storage.set(JOB_DESCRIPTIONS_KEY, {"not": "a list"})
    assert JobDescriptionStore(storage).list() == []


def test_theme_preference(storage):
    theme = ThemePreference(storage)
    assert theme.get() == "light"
    assert theme.set("Dark") == "dark"
    assert ThemePreference(storage).get() == "dark"
    with pytest.raises(ValidationError):
        theme.set("blue")
