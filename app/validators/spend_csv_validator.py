"""
app/validators/spend_csv_validator.py

Up-front parsing and validation of ``date,supplier,amount`` files.

The whole file is validated before anything is written: the result is either
the complete list of rows or a single CSVRowParseError for the first bad line.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime

from app.domain.spend_import import NormalizedSpendRowInput
from app.errors import CSVRowParseError

DATE_FORMAT = "%Y-%m-%d"
EXPECTED_COLUMNS: tuple[str, ...] = ("date", "supplier", "amount")

# Plain ASCII decimal literal with optional sign and exponent.
_AMOUNT_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$", re.ASCII)


def _invalid_date(value: str, *, row_number: int) -> CSVRowParseError:
    return CSVRowParseError(
        row_number=row_number,
        column="date",
        message=f"invalid date on row {row_number}",
        value=value,
    )


class SpendCSVNormalizer:
    """
    Turns raw upload text into typed spend rows. Pure; no I/O.
    """

    def __init__(self, *, delimiter: str = ",") -> None:
        if len(delimiter) != 1:
            raise ValueError("delimiter must be a single character.")
        self._delimiter = delimiter

    def normalize(self, raw_content: str) -> list[NormalizedSpendRowInput]:
        """
        Parse every data line of ``raw_content`` in source order.

        Line 0 is the header and is skipped unconditionally, as is any line
        that is blank after trimming. Raises CSVRowParseError on the first
        invalid line.
        """

        rows: list[NormalizedSpendRowInput] = []
        for index, line in enumerate(self._iter_lines(raw_content)):
            if index == 0:
                continue
            if not line.strip():
                continue
            rows.append(self.parse_line(line, row_number=index + 1))
        return rows

    def parse_line(self, line: str, *, row_number: int) -> NormalizedSpendRowInput:
        fields = [value.strip() for value in line.split(self._delimiter)]
        if len(fields) != len(EXPECTED_COLUMNS):
            raise CSVRowParseError(
                row_number=row_number,
                message=(
                    f"row {row_number} must have {len(EXPECTED_COLUMNS)} columns: "
                    f"{','.join(EXPECTED_COLUMNS)}"
                ),
                value=line,
            )

        raw_date, supplier_name, raw_amount = fields
        return NormalizedSpendRowInput(
            date=self._parse_date(raw_date, row_number=row_number),
            supplier_name=supplier_name,
            amount=self._parse_amount(raw_amount, row_number=row_number),
        )

    @staticmethod
    def _iter_lines(raw_content: str) -> list[str]:
        # LF-delimited; a trailing CR is dropped so CRLF files parse.
        return [line[:-1] if line.endswith("\r") else line for line in raw_content.split("\n")]

    @staticmethod
    def _parse_date(value: str, *, row_number: int) -> date:
        # strptime accepts non-ASCII digits.
        if not value.isascii():
            raise _invalid_date(value, row_number=row_number)
        try:
            return datetime.strptime(value, DATE_FORMAT).date()
        except ValueError as exc:
            raise _invalid_date(value, row_number=row_number) from exc

    @staticmethod
    def _parse_amount(value: str, *, row_number: int) -> float:
        parsed = float(value) if _AMOUNT_PATTERN.match(value) else math.nan
        if not math.isfinite(parsed):
            raise CSVRowParseError(
                row_number=row_number,
                column="amount",
                message=f"invalid amount on row {row_number}",
                value=value,
            )
        return parsed
