"""
Import subjects into the Firestore ``subjects`` collection.

Writes the built-in subject list, or the subjects from a JSON file (an array of
subject objects), as ``subjects/<id>``. Re-running overwrites by id.

Usage:
    python -m scripts.import_subjects [path/to/subjects.json] [--merge] [--dry-run]

Requires Firebase credentials (FIREBASE_CREDENTIALS or Application Default
Credentials) and the settings from .env.
"""

from __future__ import annotations

import argparse
import logging
import sys

from quizdata.config import get_firestore_client
from quizdata.exceptions import DataFileError
from quizdata.services.subjects import import_subjects, load_subjects

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Import subjects into Firestore")
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="JSON file with an array of subjects (default: built-in subject list)",
    )
    parser.add_argument("--merge", action="store_true", help="Merge into existing documents instead of overwriting")
    parser.add_argument("--dry-run", action="store_true", help="Only list what would be imported")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)-8s %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("google").setLevel(logging.WARNING)

    try:
        subjects = load_subjects(args.path)
    except DataFileError as exc:
        logger.error("Cannot load subjects: %s", exc)
        sys.exit(1)

    logger.info("Loaded %d subjects from %s", len(subjects), args.path or "built-in list")

    if args.dry_run:
        for i, subject in enumerate(subjects):
            print(f"[{i:4d}] {subject.id}  {subject.name or ''}")  # noqa: T201
        logger.info("Dry run complete, %d subjects would be imported", len(subjects))
        return

    db = get_firestore_client()
    result = import_subjects(db, subjects, merge=args.merge)

    logger.info("=" * 60)
    logger.info("Import complete: %d subjects written in %d batch(es)", result.documents, result.batches)


if __name__ == "__main__":
    main()
