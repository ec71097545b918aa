import json
import logging
from pathlib import Path
from typing import Any

from quizdata.exceptions import DataFileError

logger = logging.getLogger(__name__)


def read_json(path: str | Path) -> Any:
    """Read and parse a UTF-8 JSON file, raising DataFileError on any failure."""
    file_path = Path(path)
    if not file_path.is_file():
        raise DataFileError(str(file_path), "file not found")

    try:
        with file_path.open(encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as exc:
        raise DataFileError(str(file_path), f"malformed JSON ({exc})") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DataFileError(str(file_path), str(exc)) from exc

    logger.debug("Read %s", file_path)
    return data
