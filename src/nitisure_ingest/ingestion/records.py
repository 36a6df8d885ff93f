"""Record source — lazy, ordered reading of law-section rows from CSV."""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Optional

from nitisure_ingest.errors import SourceNotFoundError

logger = logging.getLogger(__name__)

Record = Mapping[str, Optional[str]]

# CSV column vocabulary.
ACT_NAME_THAI = "act_name_thai"
ACT_NAME_ENG = "act_name_eng"
SECTION_NUMBER_THAI = "section_number_thai"
SECTION_NUMBER_ENG = "section_number_eng"
TEXT_TH = "text_th"
TEXT_ENG = "text_eng"
NOTES_THAI = "notes_thai"
NOTES_ENG = "notes_eng"
KEYWORDS_TH = "keywords_th"
KEYWORDS_ENG = "keywords_eng"
RELATED_CASES = "related_cases"
LAW_CATEGORY = "law_category"
SOURCE_URL = "source_url"

PRIMARY_TEXT_FIELD = TEXT_TH


def field(record: Record, name: str) -> str:
    """Return ``record[name]`` stripped, or ``""`` when absent or ``None``."""
    value = record.get(name)
    return value.strip() if value else ""


def is_eligible(record: Record) -> bool:
    """Only records carrying primary (Thai) law text are ingested."""
    return bool(field(record, PRIMARY_TEXT_FIELD))


def record_label(record: Record, position: int | None = None) -> str:
    """Human-readable label used in log lines."""
    label = field(record, SECTION_NUMBER_ENG) or field(record, SECTION_NUMBER_THAI)
    if label:
        return label
    return f"Row {position}" if position is not None else "<unlabelled>"


def read_records(path: str | Path) -> Iterator[dict[str, str | None]]:
    """Yield rows of the CSV at *path* one at a time, in file order.

    Parameters
    ----------
    path:
        CSV file with a header row.  A UTF-8 BOM is tolerated.

    Raises
    ------
    SourceNotFoundError
        If *path* does not exist.  Raised eagerly, before iteration starts.
    """
    path = Path(path)
    if not path.is_file():
        raise SourceNotFoundError(f"File not found at: {path}")
    return _iter_rows(path)


def _iter_rows(path: Path) -> Iterator[dict[str, str | None]]:
    with open(path, newline="", encoding="utf-8-sig") as fh:
        reader = csv.DictReader(fh)
        for row in reader:
            # Cells beyond the header land under the ``None`` key; drop them.
            row.pop(None, None)  # type: ignore[call-overload]
            yield row
    logger.debug("Finished reading %s", path)
