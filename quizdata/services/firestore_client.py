import logging
from collections.abc import Iterable, Sequence
from typing import Any

from google.cloud.firestore import Client, DocumentReference, DocumentSnapshot
from google.cloud.firestore_v1.base_query import FieldFilter

from quizdata.models import BatchResult

logger = logging.getLogger(__name__)

# Firestore rejects write batches with more operations than this.
MAX_BATCH_SIZE = 500


def _check_batch_size(batch_size: int) -> None:
    if not 1 <= batch_size <= MAX_BATCH_SIZE:
        raise ValueError(f"batch_size must be between 1 and {MAX_BATCH_SIZE}, got {batch_size}")


def _chunks(items: Sequence[Any], size: int) -> Iterable[Sequence[Any]]:
    for start in range(0, len(items), size):
        yield items[start : start + size]


def list_documents(db: Client, collection: str) -> list[DocumentSnapshot]:
    return list(db.collection(collection).stream())


def query_equal(db: Client, collection: str, field: str, value: Any) -> list[DocumentSnapshot]:
    """Return every document in ``collection`` whose ``field`` equals ``value``."""
    query = db.collection(collection).where(filter=FieldFilter(field, "==", value))
    return list(query.stream())


def write_documents(
    db: Client,
    collection: str,
    documents: Sequence[tuple[str, dict[str, Any]]],
    *,
    merge: bool = False,
    batch_size: int = MAX_BATCH_SIZE,
) -> BatchResult:
    """
    Write ``(doc_id, body)`` pairs to ``collection`` using batched ``set`` calls.

    Documents are placed by id, so writing the same id twice overwrites
    (or merges into, with ``merge=True``) the existing document.
    Each batch commits atomically; batches are committed in order.
    """
    _check_batch_size(batch_size)
    result = BatchResult()
    collection_ref = db.collection(collection)
    total_batches = -(-len(documents) // batch_size)

    for chunk in _chunks(documents, batch_size):
        batch = db.batch()
        for doc_id, body in chunk:
            batch.set(collection_ref.document(doc_id), body, merge=merge)
        batch.commit()
        result.documents += len(chunk)
        result.batches += 1
        logger.info(
            "Committed batch %d/%d (%d documents to %s)",
            result.batches,
            total_batches,
            len(chunk),
            collection,
        )

    return result


def delete_documents(
    db: Client,
    refs: Sequence[DocumentReference],
    *,
    batch_size: int = MAX_BATCH_SIZE,
) -> BatchResult:
    """Delete the referenced documents using batched writes."""
    _check_batch_size(batch_size)
    result = BatchResult()
    total_batches = -(-len(refs) // batch_size)

    for chunk in _chunks(refs, batch_size):
        batch = db.batch()
        for ref in chunk:
            batch.delete(ref)
        batch.commit()
        result.documents += len(chunk)
        result.batches += 1
        logger.info("Committed delete batch %d/%d (%d documents)", result.batches, total_batches, len(chunk))

    return result
