"""JSON import domain service.

Reads day records and reversals exported by the entry application and
stores them. Rows that cannot be used are rejected with their location; the
rest of the document is still imported.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from fnbledger.database.base import Database
from fnbledger.domain.entities import DayRecord, ReversalRecord
from fnbledger.domain.errors import ValidationError, invalid_document, invalid_row
from fnbledger.domain.reversals import normalize_sign
from fnbledger.utils.date_parser import parse_date

logger = logging.getLogger(__name__)

# Keys of a stored entry that are bookkeeping, not meal periods
ENTRY_METADATA_KEYS = {
    "id",
    "date",
    "generalObservations",
    "createdAt",
    "createdBy",
    "lastModifiedAt",
    "lastModifiedBy",
    "calculatedTotals",
}


def decode_period(raw: Any) -> Any:
    """Period payloads may be stored as JSON text; decode those, keep the rest."""
    if isinstance(raw, str):
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            return None
    return raw


def day_record_from_raw(raw: Mapping[str, Any], day_id: Optional[str] = None) -> DayRecord:
    """Build a DayRecord from a stored entry.

    Args:
        raw: Entry mapping with period payloads at top level
        day_id: Date of the entry when the mapping itself does not carry it

    Raises:
        ValidationError: If no usable date is present
    """
    raw_id = day_id or raw.get("id") or raw.get("date")
    if not raw_id:
        raise ValidationError("entry has no date")
    try:
        day = parse_date(str(raw_id))
    except ValueError as e:
        raise ValidationError(str(e))

    periods = {
        key: decode_period(value)
        for key, value in raw.items()
        if key not in ENTRY_METADATA_KEYS
    }
    observations = raw.get("generalObservations")
    return DayRecord(
        id=day.isoformat(),
        periods=periods,
        observations=str(observations) if observations else None,
    )


def read_json(path: str | Path) -> Any:
    """Read a JSON document.

    Raises:
        ValidationError: If the file is missing or is not valid JSON
    """
    file_path = Path(path)
    if not file_path.exists():
        raise ValidationError(invalid_document(str(path), "file not found"))
    try:
        with open(file_path, "r", encoding="utf-8-sig") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValidationError(invalid_document(str(path), f"invalid JSON ({e})"))


def parse_day_records(document: Any, source: str = "document") -> tuple[list[DayRecord], list[str]]:
    """Parse day records out of a JSON document.

    The document is either an object keyed by date or a list of entries
    carrying ``id``/``date``.

    Returns:
        Tuple of (records, errors)
    """
    if isinstance(document, Mapping):
        rows = [(key, value) for key, value in document.items()]
    elif isinstance(document, list):
        rows = [(None, value) for value in document]
    else:
        raise ValidationError(invalid_document(source, "expected an object or a list of entries"))

    records: list[DayRecord] = []
    errors: list[str] = []
    for index, (day_id, raw) in enumerate(rows, start=1):
        if not isinstance(raw, Mapping):
            errors.append(invalid_row(source, index, "entry is not an object"))
            continue
        try:
            records.append(day_record_from_raw(raw, day_id))
        except ValidationError as e:
            errors.append(invalid_row(source, index, str(e)))
    return records, errors


def parse_reversal_rows(
    document: Any, source: str = "document"
) -> tuple[list[tuple[int, ReversalRecord]], list[str]]:
    """Parse reversals like ``parse_reversals``, keeping each entry number.

    Returns:
        Tuple of ((entry number, record) pairs, errors)
    """
    if not isinstance(document, list):
        raise ValidationError(invalid_document(source, "expected a list of reversals"))

    rows: list[tuple[int, ReversalRecord]] = []
    errors: list[str] = []
    for index, raw in enumerate(document, start=1):
        if not isinstance(raw, Mapping):
            errors.append(invalid_row(source, index, "reversal is not an object"))
            continue
        if not raw.get("date"):
            errors.append(invalid_row(source, index, "reversal has no date"))
            continue
        try:
            day = parse_date(str(raw["date"]))
        except ValueError as e:
            errors.append(invalid_row(source, index, str(e)))
            continue
        record = ReversalRecord.from_raw({**raw, "date": day.isoformat()})
        rows.append((index, normalize_sign(record)))
    return rows, errors


def parse_reversals(document: Any, source: str = "document") -> tuple[list[ReversalRecord], list[str]]:
    """Parse reversal records out of a JSON list, normalizing their signs.

    Returns:
        Tuple of (records, errors)
    """
    rows, errors = parse_reversal_rows(document, source)
    return [record for _, record in rows], errors


def load_day_records(path: str | Path) -> list[DayRecord]:
    """Read every day record of a JSON file.

    Raises:
        ValidationError: On unreadable JSON or on the first unusable entry
    """
    records, errors = parse_day_records(read_json(path), source=str(path))
    if errors:
        raise ValidationError(errors[0])
    return records


def load_reversals(path: str | Path) -> list[ReversalRecord]:
    """Read every reversal of a JSON file, signs normalized.

    Raises:
        ValidationError: On unreadable JSON or on the first unusable reversal
    """
    records, errors = parse_reversals(read_json(path), source=str(path))
    if errors:
        raise ValidationError(errors[0])
    return records


class ImportService:
    """Service for importing JSON exports into the store."""

    def __init__(self, db: Database):
        """Initialize import service.

        Args:
            db: Database instance
        """
        self.db = db

    def import_day_records(self, file_path: str) -> dict[str, Any]:
        """Import day records from a JSON file.

        Existing days are replaced by the imported version.

        Returns:
            Dict with import statistics:
            - imported: number of new days
            - updated: number of days replaced
            - errors: list of rejected entries with their location
        """
        records, errors = parse_day_records(read_json(file_path), source=file_path)
        imported = 0
        updated = 0
        for record in records:
            if self.db.get_day_record(record.id) is None:
                imported += 1
            else:
                updated += 1
            self.db.save_day_record(record)
        logger.info("Imported %d day records (%d replaced) from %s", imported, updated, file_path)
        return {"imported": imported, "updated": updated, "errors": errors}

    def import_reversals(self, file_path: str) -> dict[str, Any]:
        """Import reversals from a JSON file.

        Returns:
            Dict with import statistics:
            - imported: number of reversals stored
            - errors: list of rejected entries with their location
        """
        rows, errors = parse_reversal_rows(read_json(file_path), source=file_path)
        imported = 0
        for index, record in rows:
            try:
                self.db.add_reversal(record)
            except ValidationError as e:
                errors.append(invalid_row(file_path, index, str(e)))
                continue
            imported += 1
        logger.info("Imported %d reversals from %s", imported, file_path)
        return {"imported": imported, "errors": errors}
