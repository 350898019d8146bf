"""
Extraction of unit timings from cargo's timing report.

``cargo build --timings`` writes an HTML page that embeds its data as a
JavaScript literal::

    const UNIT_DATA = [{"i":0,"name":"serde","version":"1.0.0",...}, ...];

Extraction is two steps that fail independently: locate the array between
the marker and its closing ``];``, then decode it into UnitTiming rows.
"""

from __future__ import annotations

import json

from pydantic import TypeAdapter, ValidationError

from ...core.exceptions import MalformedRecordError, ReportParseError, ReportParseFailure
from ...core.models.timing import UnitTiming

UNIT_DATA_MARKER = "const UNIT_DATA = "
UNIT_DATA_END = "];"

_UNIT_ADAPTER = TypeAdapter(UnitTiming)


def locate_unit_data(html: str, report_path: str | None = None) -> str:
    """
    Return the JSON array text embedded after the UNIT_DATA marker.

    Raises:
        ReportParseError: MARKER_NOT_FOUND when the marker is absent,
            MALFORMED_PAYLOAD when the closing delimiter is missing
    """
    start_idx = html.find(UNIT_DATA_MARKER)
    if start_idx < 0:
        raise ReportParseError(
            "UNIT_DATA not found in timing report",
            reason=ReportParseFailure.MARKER_NOT_FOUND,
            report_path=report_path,
        )

    rest = html[start_idx + len(UNIT_DATA_MARKER) :]
    end_idx = rest.find(UNIT_DATA_END)
    if end_idx < 0:
        raise ReportParseError(
            "UNIT_DATA end not found in timing report",
            reason=ReportParseFailure.MALFORMED_PAYLOAD,
            report_path=report_path,
        )

    # keep the closing bracket, drop the semicolon
    return rest[: end_idx + 1]


def decode_unit_data(payload: str, report_path: str | None = None) -> list[UnitTiming]:
    """
    Decode the UNIT_DATA array into unit timings.

    Every row must decode; a single bad row rejects the whole report.

    Raises:
        ReportParseError: MALFORMED_PAYLOAD when the text is not a JSON array
        MalformedRecordError: When one row lacks or mistypes a field
    """
    try:
        rows = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ReportParseError(
            f"UNIT_DATA is not valid JSON: {e.msg}",
            reason=ReportParseFailure.MALFORMED_PAYLOAD,
            report_path=report_path,
            cause=e,
        ) from e

    if not isinstance(rows, list):
        raise ReportParseError(
            f"UNIT_DATA is a {type(rows).__name__}, expected a list",
            reason=ReportParseFailure.MALFORMED_PAYLOAD,
            report_path=report_path,
        )

    units: list[UnitTiming] = []
    for index, row in enumerate(rows):
        try:
            units.append(_UNIT_ADAPTER.validate_python(row))
        except ValidationError as e:
            raise MalformedRecordError(
                f"Malformed unit timing record: {e.errors()[0]['msg']}",
                index=index,
                report_path=report_path,
                cause=e,
            ) from e
    return units


def parse_unit_data(html: str, report_path: str | None = None) -> list[UnitTiming]:
    """Locate and decode the unit timings of a timing report."""
    return decode_unit_data(locate_unit_data(html, report_path), report_path)
