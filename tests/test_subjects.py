from datetime import UTC, datetime

import pytest

from quizdata.config import Config
from quizdata.exceptions import DataFileError
from quizdata.services.subjects import (
    DEFAULT_SUBJECTS,
    import_subjects,
    list_subjects,
    load_subjects,
    parse_subjects,
)

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=UTC)


def test_load_subjects_defaults_to_builtin_list():
    subjects = load_subjects()

    assert [s.id for s in subjects] == [s["id"] for s in DEFAULT_SUBJECTS]


def test_import_writes_every_subject_with_fields_intact(fake_db):
    subjects = load_subjects()

    result = import_subjects(fake_db, subjects, now=NOW)

    stored = fake_db.data["subjects"]
    assert result.documents == len(DEFAULT_SUBJECTS)
    assert len(stored) == len(DEFAULT_SUBJECTS)
    for source in DEFAULT_SUBJECTS:
        doc = stored[source["id"]]
        assert {k: doc[k] for k in source} == source
        assert doc["createdAt"] == NOW
        assert doc["updatedAt"] == NOW


def test_reimport_overwrites_instead_of_duplicating(fake_db, write_json):
    path = write_json([{"id": "istorie", "name": "Istorie", "order": 1}])
    import_subjects(fake_db, load_subjects(path), now=NOW)

    path = write_json([{"id": "istorie", "name": "Istoria lumii", "order": 1}])
    import_subjects(fake_db, load_subjects(path), now=NOW)

    assert list(fake_db.data["subjects"]) == ["istorie"]
    assert fake_db.data["subjects"]["istorie"]["name"] == "Istoria lumii"


def test_import_respects_configured_batch_size(fake_db, monkeypatch):
    monkeypatch.setattr(Config, "BATCH_SIZE", 4)

    result = import_subjects(fake_db, load_subjects(), now=NOW)

    assert result.batches == 2
    assert fake_db.commits == [4, 2]


def test_load_subjects_rejects_record_without_id(write_json):
    path = write_json([{"name": "Fără id"}])

    with pytest.raises(DataFileError, match="subject #1"):
        load_subjects(path)


def test_load_subjects_rejects_non_array(write_json):
    with pytest.raises(DataFileError, match="JSON array"):
        load_subjects(write_json({"id": "istorie"}))


def test_list_subjects_sorted_by_id(fake_db):
    fake_db.seed("subjects", "geografie", {"name": "Geografie"})
    fake_db.seed("subjects", "biologie", {"name": "Biologie"})

    subjects = list_subjects(fake_db)

    assert [(s.id, s.name) for s in subjects] == [("biologie", "Biologie"), ("geografie", "Geografie")]


def test_null_fields_are_kept(fake_db):
    subjects = parse_subjects([{"id": "istorie", "name": "Istorie", "icon": None}])

    import_subjects(fake_db, subjects, now=NOW)

    doc = fake_db.data["subjects"]["istorie"]
    assert "icon" in doc
    assert doc["icon"] is None


def test_empty_subject_id_is_rejected():
    with pytest.raises(DataFileError, match="subject #2"):
        parse_subjects([{"id": "istorie"}, {"id": "", "name": "Fără id"}])


def test_merge_import_keeps_creation_time(fake_db):
    fake_db.seed("subjects", "istorie", {"name": "Istorie", "createdAt": "old", "extra": 1})

    import_subjects(fake_db, parse_subjects([{"id": "istorie", "name": "Istoria lumii"}]), merge=True, now=NOW)

    doc = fake_db.data["subjects"]["istorie"]
    assert doc["createdAt"] == "old"
    assert doc["updatedAt"] == NOW
    assert doc["name"] == "Istoria lumii"
    assert doc["extra"] == 1
