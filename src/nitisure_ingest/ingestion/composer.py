"""Canonical text and payload composition for a law-section record.

``compose`` is a pure function: the same record always yields the same
text, which keeps re-ingestion reproducible.
"""

from __future__ import annotations

from typing import Any

from nitisure_ingest.ingestion import records as r
from nitisure_ingest.ingestion.records import Record, field


def compose(record: Record) -> str:
    """Build the text submitted for embedding.

    Labels and their order are fixed; a missing field contributes an
    empty value and never shifts the surrounding labels::

        Law: <act_name_thai> (<act_name_eng>)
        Section: <section_number_eng>
        Thai Text: <text_th>
        Eng Text: <text_eng>
        Explanation: <notes_thai>
        Keywords: <keywords_th>, <keywords_eng>
        Cases: <related_cases>
    """
    lines = [
        f"Law: {field(record, r.ACT_NAME_THAI)} ({field(record, r.ACT_NAME_ENG)})",
        f"Section: {field(record, r.SECTION_NUMBER_ENG)}",
        f"Thai Text: {field(record, r.TEXT_TH)}",
        f"Eng Text: {field(record, r.TEXT_ENG)}",
        f"Explanation: {field(record, r.NOTES_THAI)}",
        f"Keywords: {field(record, r.KEYWORDS_TH)}, {field(record, r.KEYWORDS_ENG)}",
        f"Cases: {field(record, r.RELATED_CASES)}",
    ]
    return "\n".join(lines).strip()


def build_payload(record: Record) -> dict[str, Any]:
    """Display / filter fields stored alongside the vector."""
    return {
        "act_name": field(record, r.ACT_NAME_THAI),
        "section": field(record, r.SECTION_NUMBER_ENG),
        "text": field(record, r.TEXT_TH),
        "explanation": field(record, r.NOTES_THAI),
        "url": field(record, r.SOURCE_URL),
        "category": field(record, r.LAW_CATEGORY),
    }
