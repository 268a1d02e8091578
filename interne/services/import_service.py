"""Import entries exported by the old browser-only client."""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from pydantic import ValidationError
from sqlalchemy.orm import Session

from interne.models.entry import Entry
from interne.models.user import User
from interne.models.visit import Visit
from interne.schemas.entry import EntryCreate
from interne.schemas.export import LegacyEntry
from interne.services.availability import parse_timestamp

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    """Outcome of an import run."""

    imported: int = 0
    skipped: list[str] = field(default_factory=list)


def _describe(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in error.errors()
    )


def import_legacy_entries(
    db: Session, user: User, records: list[dict], now: datetime
) -> ImportResult:
    """Import legacy records as entries owned by ``user``.

    Records with an invalid duration, interval, URL or title are skipped and
    reported; nothing is coerced to a default. A legacy ``visited`` count
    becomes that many visit rows.
    """
    result = ImportResult()

    for index, record in enumerate(records):
        try:
            legacy = LegacyEntry.model_validate(record)
            data = EntryCreate(
                url=legacy.url,
                title=legacy.title,
                description=legacy.description,
                duration=legacy.duration,
                interval=legacy.interval,
            )
        except ValidationError as e:
            reason = f"record {index}: {_describe(e)}"
            logger.warning(f"Skipping legacy entry {reason}")
            result.skipped.append(reason)
            continue

        dismissed_at = None
        if legacy.dismissed_at is not None:
            dismissed_at = parse_timestamp(legacy.dismissed_at) or now

        entry = Entry(
            owner_id=user.id,
            url=data.url,
            title=data.title,
            description=data.description,
            duration=data.duration,
            interval=data.interval,
            dismissed_at=dismissed_at,
            created_at=parse_timestamp(legacy.created_at) or now,
            updated_at=parse_timestamp(legacy.updated_at) or now,
        )
        db.add(entry)

        for _ in range(max(legacy.visited or 0, 0)):
            entry.visits.append(Visit(user_id=user.id, visited_at=dismissed_at or now))

        result.imported += 1

    db.commit()
    logger.info(f"Imported {result.imported} entries for user {user.id}")
    return result
