"""Turn CSV text into header-keyed profile records."""

from __future__ import annotations

import logging
from typing import List

from profilesync.errors import ParseError
from profilesync.ingest.tokenizer import tokenize_line
from profilesync.profiles.models import FieldName, Record

logger = logging.getLogger(__name__)


def _derive_fields(record: Record, row_index: int) -> None:
    full_name = FieldName.FULL_NAME.value
    fname = record.get(FieldName.FNAME.value)
    lname = record.get(FieldName.LNAME.value)
    if not record.get(full_name) and fname and lname:
        record[full_name] = f"{fname} {lname}"

    uuid = FieldName.UUID.value
    if not record.get(uuid):
        record[uuid] = record.get(FieldName.PROFILE_NAME.value) or f"profile_{row_index}"


def parse_csv(text: str) -> List[Record]:
    """
    Parse CSV text with a header row into an ordered list of records.

    Blank lines are dropped before the header is read. ``row_index`` for the
    uuid fallback is the 1-based position among the remaining data lines, so
    a row skipped as blank still consumes its index.

    Raises:
        ParseError: If fewer than two non-blank lines are present
    """
    lines = [line for line in text.split("\n") if line.strip()]
    if len(lines) < 2:
        raise ParseError("CSV must have at least a header row and one data row")

    headers = [header.strip() for header in tokenize_line(lines[0])]

    records: List[Record] = []
    for row_index, line in enumerate(lines[1:], start=1):
        values = tokenize_line(line)
        if len(values) == 1 and values[0] == "":
            logger.debug(f"Skipping blank CSV row {row_index}")
            continue

        record: Record = {}
        for position, header in enumerate(headers):
            record[header] = values[position].strip() if position < len(values) else ""

        _derive_fields(record, row_index)
        records.append(record)

    logger.debug(f"Parsed {len(records)} records from {len(lines) - 1} data rows")
    return records
