"""Identity strategies for index entries.

``random``
    A fresh UUID4 per write.  Re-running over unchanged data creates
    duplicate entries.
``stable``
    A UUID5 over the record's natural key (act names + both section
    numbers), so a re-run overwrites the entries written before.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable

from nitisure_ingest.ingestion import records as r
from nitisure_ingest.ingestion.composer import compose
from nitisure_ingest.ingestion.records import Record, field

IdentityStrategy = Callable[[Record], str]

NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "https://nitisure/laws")


def random_identity(record: Record) -> str:
    return str(uuid.uuid4())


def natural_key(record: Record) -> str:
    """``act_name_thai|act_name_eng|section_number_eng|section_number_thai``.

    Empty when the record carries neither section identifier, since act
    names alone do not tell sections apart.
    """
    sections = [field(record, r.SECTION_NUMBER_ENG), field(record, r.SECTION_NUMBER_THAI)]
    if not any(sections):
        return ""
    return "|".join([field(record, r.ACT_NAME_THAI), field(record, r.ACT_NAME_ENG), *sections])


def stable_identity(record: Record) -> str:
    # Records without a section identifier fall back to their composed text.
    key = natural_key(record) or "text:" + compose(record)
    return str(uuid.uuid5(NAMESPACE, key))


_STRATEGIES: dict[str, IdentityStrategy] = {
    "random": random_identity,
    "stable": stable_identity,
}


def get_identity_strategy(name: str) -> IdentityStrategy:
    try:
        return _STRATEGIES[name]
    except KeyError:
        raise ValueError(
            f"Unsupported identity strategy {name!r}; choose one of {sorted(_STRATEGIES)}"
        ) from None
