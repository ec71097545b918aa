"""
Import themes into the Firestore ``themes`` collection.

The JSON file holds either an array of themes, or an object mapping a subject
id to an array of themes. Each theme is written as ``themes/<id>`` (``slug`` is
used when ``id`` is missing) with ``totalQuestions`` reset to 0.

Usage:
    python -m scripts.import_themes [path/to/themes.json] [--subject-id ID] [--dry-run]

The file is parsed completely before connecting, so a missing or malformed
file never results in a partial import. A file without any theme is an
error.
"""

from __future__ import annotations

import argparse
import logging
import sys

from quizdata.config import Config, get_firestore_client
from quizdata.exceptions import DataFileError
from quizdata.services.themes import import_themes, load_themes

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Import themes into Firestore")
    parser.add_argument(
        "path",
        nargs="?",
        default=Config.THEMES_FILE,
        help=f"JSON file with the themes (default: {Config.THEMES_FILE})",
    )
    parser.add_argument(
        "--subject-id",
        default=None,
        help="Assign every imported theme to this subject",
    )
    parser.add_argument("--dry-run", action="store_true", help="Only list what would be imported")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)-8s %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("google").setLevel(logging.WARNING)

    try:
        themes = load_themes(args.path, subject_id=args.subject_id)
    except DataFileError as exc:
        logger.error("Cannot load themes: %s", exc)
        sys.exit(1)

    if not themes:
        logger.error("No themes found in %s", args.path)
        sys.exit(1)

    logger.info("Loaded %d themes from %s", len(themes), args.path)

    if args.dry_run:
        for i, theme in enumerate(themes):
            print(f"[{i:4d}] {theme.doc_id}  {theme.name or ''}  → {theme.subject_id}")  # noqa: T201
        logger.info("Dry run complete, %d themes would be imported", len(themes))
        return

    db = get_firestore_client()
    result = import_themes(db, themes)

    logger.info("=" * 60)
    logger.info("Import complete: %d themes written in %d batch(es)", result.documents, result.batches)


if __name__ == "__main__":
    main()
