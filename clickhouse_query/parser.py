"""
Turns the plain-text backend reply into rows or a single value.

Table replies are newline-delimited records with tab-delimited fields
(ClickHouse TabSeparated). Every value stays a string.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Sequence, Union

import structlog

from .errors import MalformedRowError

logger = structlog.get_logger(__name__)

SCALAR_STRIP_CHARS = ("\r", "\n", "\t")


@dataclass
class TableResult:
    rows: List[Dict[str, str]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Dict[str, str]]:
        return iter(self.rows)


@dataclass
class ScalarResult:
    value: str = ""

    def __str__(self) -> str:
        return self.value


ParsedResult = Union[TableResult, ScalarResult]


def build_row(columns: Sequence[str], fields: Sequence[str]) -> Dict[str, str]:
    """Pair columns with fields by position, stopping at the shorter of the two."""
    row = {}
    for i in range(min(len(columns), len(fields))):
        row[columns[i]] = fields[i]
    return row


def parse_table(data: str, columns: Sequence[str], strict: bool = False) -> TableResult:
    """
    One row per non-empty line, keyed by ``columns`` in order.

    Extra fields are dropped and missing ones are left out of the row,
    unless ``strict`` is set, in which case any mismatch raises
    MalformedRowError.
    """
    result = TableResult()

    for line_number, line in enumerate(data.split("\n")):
        if len(line.replace("\n", "")) == 0:
            logger.debug("blank_line_skipped", line_number=line_number)
            continue

        fields = line.split("\t")
        if len(fields) != len(columns):
            if strict:
                raise MalformedRowError(line_number, len(columns), len(fields))
            logger.debug("field_count_mismatch",
                         line_number=line_number,
                         columns=len(columns),
                         fields=len(fields))

        result.rows.append(build_row(columns, fields))

    return result


def parse_scalar(data: str) -> ScalarResult:
    """Remove every CR, LF and tab, wherever they occur."""
    value = data
    for char in SCALAR_STRIP_CHARS:
        value = value.replace(char, "")
    return ScalarResult(value)


def parse_result(data: str, is_table_result: bool, columns: Sequence[str] = (),
                 strict: bool = False) -> ParsedResult:
    if is_table_result:
        return parse_table(data, columns, strict=strict)
    return parse_scalar(data)
