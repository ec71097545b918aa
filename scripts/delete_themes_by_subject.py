"""
Delete every theme that belongs to one subject.

The subject id is taken from the command line, or chosen from a numbered list
of the subjects in Firestore. Matching themes are listed and the deletion must
be confirmed by typing DELETE (skip with --yes). Deletion cannot be undone.

Usage:
    python -m scripts.delete_themes_by_subject [SUBJECT_ID] [--yes] [--dry-run]
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable

from quizdata.config import get_firestore_client
from quizdata.exceptions import NotFoundError, SelectionError
from quizdata.models import SubjectSummary, ThemeSummary
from quizdata.services.subjects import list_subjects
from quizdata.services.themes import delete_themes, find_themes_by_subject

logger = logging.getLogger(__name__)

CONFIRMATION_WORD = "DELETE"

Prompt = Callable[[str], str]


def select_subject_interactive(subjects: list[SubjectSummary], prompt: Prompt | None = None) -> str | None:
    """
    Show a numbered menu of subjects and return the chosen id.

    Returns None when the operator picks the trailing "Cancel" entry.
    """
    print("\nAvailable subjects:\n")  # noqa: T201
    for index, subject in enumerate(subjects, start=1):
        print(f"  {index}. {subject.name or subject.id} ({subject.id})")  # noqa: T201
    print(f"  {len(subjects) + 1}. Cancel\n")  # noqa: T201

    prompt = prompt or input
    answer = prompt("Select subject number: ").strip()
    try:
        choice = int(answer)
    except ValueError:
        raise SelectionError(f"Invalid selection: {answer!r}") from None

    if choice == len(subjects) + 1:
        return None
    if not 1 <= choice <= len(subjects):
        raise SelectionError(f"Invalid selection: {choice}")
    return subjects[choice - 1].id


def resolve_subject_id(
    subject_arg: str | None,
    subjects: list[SubjectSummary],
    prompt: Prompt | None = None,
) -> str | None:
    """Return the subject to clear, from the argument if given, otherwise interactively."""
    if subject_arg is None:
        return select_subject_interactive(subjects, prompt)

    if not any(subject.id == subject_arg for subject in subjects):
        raise NotFoundError("Subject", subject_arg)
    return subject_arg


def confirm_delete(subject_id: str, themes: list[ThemeSummary], prompt: Prompt | None = None) -> bool:
    print(f"\nSubject: {subject_id}")  # noqa: T201
    print(f"Themes to delete: {len(themes)}\n")  # noqa: T201
    for theme in themes:
        print(f"  - {theme.name or theme.id} ({theme.id})")  # noqa: T201
    print("\nThis action CANNOT be undone!\n")  # noqa: T201

    prompt = prompt or input
    answer = prompt(f'Type "{CONFIRMATION_WORD}" to confirm or press Enter to cancel: ')
    return answer.strip() == CONFIRMATION_WORD


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Delete all themes of a subject from Firestore")
    parser.add_argument(
        "subject_id",
        nargs="?",
        default=None,
        help="Subject whose themes are deleted (default: choose interactively)",
    )
    parser.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    parser.add_argument("--dry-run", action="store_true", help="Only list the themes that would be deleted")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)-8s %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("google").setLevel(logging.WARNING)

    db = get_firestore_client()

    subjects = list_subjects(db)
    logger.info("Loaded %d subjects", len(subjects))

    try:
        subject_id = resolve_subject_id(args.subject_id, subjects)
    except NotFoundError as exc:
        logger.error("%s. Available subjects: %s", exc, ", ".join(s.id for s in subjects) or "none")
        sys.exit(1)
    except SelectionError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    if subject_id is None:
        logger.info("Cancelled")
        return

    logger.info("Selected subject: %s", subject_id)

    themes = find_themes_by_subject(db, subject_id)
    if not themes:
        logger.info("No themes found in subject %s", subject_id)
        return

    logger.info("Found %d theme(s)", len(themes))

    if args.dry_run:
        for i, theme in enumerate(themes):
            print(f"[{i:4d}] {theme.id}  {theme.name or ''}")  # noqa: T201
        logger.info("Dry run complete, %d themes would be deleted", len(themes))
        return

    if not args.yes and not confirm_delete(subject_id, themes):
        logger.info("Deletion cancelled")
        return

    result = delete_themes(db, themes)

    logger.info("=" * 60)
    logger.info("Deleted %d theme(s) of subject %s in %d batch(es)", result.documents, subject_id, result.batches)
    logger.info("Questions linked to these themes are still in the database")


if __name__ == "__main__":
    main()
