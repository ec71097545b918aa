import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from google.cloud.firestore import Client
from pydantic import ValidationError

from quizdata.config import Config
from quizdata.exceptions import DataFileError
from quizdata.models import BatchResult, Theme, ThemeSummary
from quizdata.services.data_files import read_json
from quizdata.services.firestore_client import delete_documents, query_equal, write_documents

logger = logging.getLogger(__name__)

SUBJECT_FIELD = "subjectId"


def _parse_theme(item: Any, position: str, source: str, default_subject: str | None) -> Theme:
    if not isinstance(item, dict):
        raise DataFileError(source, f"theme {position} is not a JSON object")

    data = dict(item)
    if default_subject is not None and not data.get(SUBJECT_FIELD):
        data[SUBJECT_FIELD] = default_subject

    try:
        return Theme.model_validate(data)
    except ValidationError as exc:
        raise DataFileError(source, f"theme {position} is invalid: {exc}") from exc


def parse_themes(raw: Any, source: str = "<inline>", subject_id: str | None = None) -> list[Theme]:
    """
    Parse theme records from a flat list or a ``{subjectId: [themes]}`` mapping.

    In the grouped form the key fills in ``subjectId`` for themes lacking one.
    A non-empty ``subject_id`` overrides the subject of every theme.
    """
    themes: list[Theme] = []

    if isinstance(raw, list):
        for index, item in enumerate(raw):
            themes.append(_parse_theme(item, f"#{index + 1}", source, subject_id))
    elif isinstance(raw, dict):
        for group, items in raw.items():
            if not isinstance(items, list):
                raise DataFileError(source, f"group '{group}' must be a JSON array of themes")
            for index, item in enumerate(items):
                themes.append(_parse_theme(item, f"'{group}'#{index + 1}", source, subject_id or group))
    else:
        raise DataFileError(source, "expected a JSON array of themes or an object of arrays keyed by subject")

    if subject_id:
        for theme in themes:
            theme.subject_id = subject_id

    return themes


def load_themes(path: str | Path, subject_id: str | None = None) -> list[Theme]:
    return parse_themes(read_json(path), source=str(path), subject_id=subject_id)


def import_themes(
    db: Client,
    themes: list[Theme],
    *,
    now: datetime | None = None,
    config: Config | None = None,
) -> BatchResult:
    """Write each theme to ``themes/<id>`` with its question counter reset to 0."""
    config = config or Config()
    if now is None:
        now = datetime.now(UTC)

    documents = [
        (
            theme.doc_id,
            {
                **theme.to_document(),
                "totalQuestions": 0,
                "createdAt": now,
                "updatedAt": now,
            },
        )
        for theme in themes
    ]
    result = write_documents(db, config.THEMES_COLLECTION, documents, batch_size=config.BATCH_SIZE)
    logger.info("Imported %d themes in %d batch(es)", result.documents, result.batches)
    return result


def find_themes_by_subject(db: Client, subject_id: str, config: Config | None = None) -> list[ThemeSummary]:
    config = config or Config()
    return [
        ThemeSummary(id=snapshot.id, name=(snapshot.to_dict() or {}).get("name"))
        for snapshot in query_equal(db, config.THEMES_COLLECTION, SUBJECT_FIELD, subject_id)
    ]


def delete_themes(db: Client, themes: list[ThemeSummary], config: Config | None = None) -> BatchResult:
    config = config or Config()
    collection_ref = db.collection(config.THEMES_COLLECTION)
    refs = [collection_ref.document(theme.id) for theme in themes]
    return delete_documents(db, refs, batch_size=config.BATCH_SIZE)


def delete_themes_by_subject(db: Client, subject_id: str, config: Config | None = None) -> BatchResult:
    """
    Delete every theme whose ``subjectId`` equals ``subject_id``.

    A subject without themes is not an error: nothing is written and an empty
    result is returned. Query failures propagate.
    """
    themes = find_themes_by_subject(db, subject_id, config)
    if not themes:
        logger.info("No themes found for subject %s", subject_id)
        return BatchResult()

    result = delete_themes(db, themes, config)
    logger.info("Deleted %d themes of subject %s", result.documents, subject_id)
    return result
