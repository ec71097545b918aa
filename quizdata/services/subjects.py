import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from google.cloud.firestore import Client
from pydantic import ValidationError

from quizdata.config import Config
from quizdata.exceptions import DataFileError
from quizdata.models import BatchResult, Subject, SubjectSummary
from quizdata.services.data_files import read_json
from quizdata.services.firestore_client import list_documents, write_documents

logger = logging.getLogger(__name__)

DEFAULT_SUBJECTS: list[dict[str, Any]] = [
    {
        "id": "istorie",
        "slug": "istorie",
        "name": "Istorie",
        "icon": "🏛️",
        "description": "Învață despre evenimente istorice importante",
        "color": "#E63946",
        "isPublished": True,
        "order": 1,
    },
    {
        "id": "biologie",
        "slug": "biologie",
        "name": "Biologie",
        "icon": "🧬",
        "description": "Descoperă lumea vieții și a organismelor",
        "color": "#06A77D",
        "isPublished": True,
        "order": 2,
    },
    {
        "id": "geografie",
        "slug": "geografie",
        "name": "Geografie",
        "icon": "🌍",
        "description": "Explorează planeta și locurile ei",
        "color": "#1982C4",
        "isPublished": True,
        "order": 3,
    },
    {
        "id": "matematica",
        "slug": "matematica",
        "name": "Matematică",
        "icon": "🔢",
        "description": "Rezolvă probleme și înțelege logica matematică",
        "color": "#6A4C93",
        "isPublished": True,
        "order": 4,
    },
    {
        "id": "fizica",
        "slug": "fizica",
        "name": "Fizică",
        "icon": "⚛️",
        "description": "Înțelege legile universului și ale naturii",
        "color": "#F77F00",
        "isPublished": True,
        "order": 5,
    },
    {
        "id": "chimie",
        "slug": "chimie",
        "name": "Chimie",
        "icon": "🧪",
        "description": "Experimentează cu reacții și molecule",
        "color": "#FCBF49",
        "isPublished": True,
        "order": 6,
    },
]


def parse_subjects(raw: Any, source: str = "<inline>") -> list[Subject]:
    if not isinstance(raw, list):
        raise DataFileError(source, "expected a JSON array of subjects")

    subjects: list[Subject] = []
    for index, item in enumerate(raw):
        try:
            subjects.append(Subject.model_validate(item))
        except ValidationError as exc:
            raise DataFileError(source, f"subject #{index + 1} is invalid: {exc}") from exc
    return subjects


def load_subjects(path: str | Path | None = None) -> list[Subject]:
    """Load subjects from a JSON file, or the built-in list when no path is given."""
    if path is None:
        return parse_subjects(DEFAULT_SUBJECTS)
    return parse_subjects(read_json(path), source=str(path))


def _subject_document(subject: Subject, now: datetime, *, merge: bool) -> dict[str, Any]:
    # A merge write keeps the createdAt already stored on the document.
    if merge:
        return {**subject.to_document(), "updatedAt": now}
    return {**subject.to_document(), "createdAt": now, "updatedAt": now}


def import_subjects(
    db: Client,
    subjects: list[Subject],
    *,
    merge: bool = False,
    now: datetime | None = None,
    config: Config | None = None,
) -> BatchResult:
    """Write each subject to ``subjects/<id>``; re-imports overwrite by id."""
    config = config or Config()
    if now is None:
        now = datetime.now(UTC)

    documents = [
        (subject.id, _subject_document(subject, now, merge=merge))
        for subject in subjects
    ]
    result = write_documents(
        db,
        config.SUBJECTS_COLLECTION,
        documents,
        merge=merge,
        batch_size=config.BATCH_SIZE,
    )
    logger.info("Imported %d subjects in %d batch(es)", result.documents, result.batches)
    return result


def list_subjects(db: Client, config: Config | None = None) -> list[SubjectSummary]:
    """All subjects in the database, sorted by id."""
    config = config or Config()
    subjects = [
        SubjectSummary(id=snapshot.id, name=(snapshot.to_dict() or {}).get("name"))
        for snapshot in list_documents(db, config.SUBJECTS_COLLECTION)
    ]
    return sorted(subjects, key=lambda s: s.id)
