"""
tests/test_spend_csv_validator.py

Pytest unit tests for SpendCSVNormalizer.

Pure Python: no database, no I/O.

Coverage
--------
- Reference three-row file
- Header and blank-line skipping, line numbering that counts both
- Column-count, date and amount failures with 1-based row numbers
- Fail-fast on the first bad row
- Signed amounts, trimming, CRLF input, custom delimiter
"""

from __future__ import annotations

from datetime import date

import pytest

from app.errors import CSVRowParseError
from app.validators.spend_csv_validator import SpendCSVNormalizer
from tests.conftest import SAMPLE_CSV


@pytest.fixture()
def normalizer() -> SpendCSVNormalizer:
    return SpendCSVNormalizer()


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------


class TestNormalize:
    def test_reference_file_yields_three_rows_in_order(self, normalizer: SpendCSVNormalizer) -> None:
        rows = normalizer.normalize(SAMPLE_CSV)

        assert [(row.date, row.supplier_name, row.amount) for row in rows] == [
            (date(2026, 2, 1), "ACME", 100.0),
            (date(2026, 2, 1), "ACME", 50.0),
            (date(2026, 2, 2), "Beta", 25.0),
        ]

    def test_header_is_skipped_even_when_it_looks_like_data(
        self, normalizer: SpendCSVNormalizer
    ) -> None:
        rows = normalizer.normalize("2026-01-01,Header,1\n2026-01-02,ACME,2")
        assert len(rows) == 1
        assert rows[0].supplier_name == "ACME"

    def test_blank_lines_are_skipped(self, normalizer: SpendCSVNormalizer) -> None:
        content = "date,supplier,amount\n\n2026-02-01,ACME,1\n   \n2026-02-02,Beta,2\n"
        assert len(normalizer.normalize(content)) == 2

    @pytest.mark.parametrize("content", ["", "date,supplier,amount", "date,supplier,amount\n\n"])
    def test_no_data_lines_yields_empty_list(
        self, normalizer: SpendCSVNormalizer, content: str
    ) -> None:
        assert normalizer.normalize(content) == []

    def test_fields_are_trimmed_and_supplier_case_is_kept(
        self, normalizer: SpendCSVNormalizer
    ) -> None:
        rows = normalizer.normalize("h\n 2026-02-01 ,  acme Ltd ,  12.5 ")
        assert rows[0].supplier_name == "acme Ltd"
        assert rows[0].amount == pytest.approx(12.5)

    @pytest.mark.parametrize(
        "raw_amount, expected",
        [
            ("-12.5", -12.5),
            ("+3", 3.0),
            (".5", 0.5),
            ("1e3", 1000.0),
            ("7.", 7.0),
        ],
    )
    def test_signed_and_decimal_amounts(
        self, normalizer: SpendCSVNormalizer, raw_amount: str, expected: float
    ) -> None:
        rows = normalizer.normalize(f"h\n2026-02-01,ACME,{raw_amount}")
        assert rows[0].amount == pytest.approx(expected)

    def test_crlf_line_endings(self, normalizer: SpendCSVNormalizer) -> None:
        rows = normalizer.normalize(SAMPLE_CSV.replace("\n", "\r\n"))
        assert len(rows) == 3
        assert rows[-1].amount == pytest.approx(25.0)

    def test_custom_delimiter(self) -> None:
        rows = SpendCSVNormalizer(delimiter=";").normalize("h\n2026-02-01;ACME, Inc;10")
        assert rows[0].supplier_name == "ACME, Inc"

    def test_delimiter_must_be_one_character(self) -> None:
        with pytest.raises(ValueError):
            SpendCSVNormalizer(delimiter=";;")


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestNormalizeFailures:
    def test_two_columns_names_the_line(self, normalizer: SpendCSVNormalizer) -> None:
        content = "date,supplier,amount\n2026-02-01,ACME,100\n2026-02-01,ACME"

        with pytest.raises(CSVRowParseError) as ctx:
            normalizer.normalize(content)

        assert ctx.value.row_number == 3
        assert str(ctx.value) == "row 3 must have 3 columns: date,supplier,amount"

    def test_four_columns_rejected(self, normalizer: SpendCSVNormalizer) -> None:
        with pytest.raises(CSVRowParseError) as ctx:
            normalizer.normalize("h\n2026-02-01,ACME,1,extra")
        assert ctx.value.row_number == 2

    def test_line_numbers_count_header_and_blank_lines(
        self, normalizer: SpendCSVNormalizer
    ) -> None:
        content = "h\n\n2026-02-01,ACME,1\n\nnot-a-date,ACME,1"

        with pytest.raises(CSVRowParseError) as ctx:
            normalizer.normalize(content)

        assert ctx.value.row_number == 5
        assert ctx.value.column == "date"
        assert ctx.value.message == "invalid date on row 5"

    @pytest.mark.parametrize(
        "raw_date", ["2026-13-01", "2026-02-30", "01/02/2026", "", "٢٠٢٦-02-01"]
    )
    def test_invalid_dates(self, normalizer: SpendCSVNormalizer, raw_date: str) -> None:
        with pytest.raises(CSVRowParseError) as ctx:
            normalizer.normalize(f"h\n{raw_date},ACME,1")
        assert ctx.value.message == "invalid date on row 2"
        assert ctx.value.value == raw_date

    @pytest.mark.parametrize(
        "raw_amount", ["abc", "", "NaN", "inf", "-inf", "1_000", "1e999", "0x10", "١٠٠"]
    )
    def test_invalid_amounts(self, normalizer: SpendCSVNormalizer, raw_amount: str) -> None:
        with pytest.raises(CSVRowParseError) as ctx:
            normalizer.normalize(f"h\n2026-02-01,ACME,{raw_amount}")
        assert ctx.value.column == "amount"
        assert ctx.value.message == "invalid amount on row 2"

    def test_first_bad_row_wins(self, normalizer: SpendCSVNormalizer) -> None:
        content = "h\n2026-02-01,ACME,oops\nbad-line"

        with pytest.raises(CSVRowParseError) as ctx:
            normalizer.normalize(content)

        assert ctx.value.message == "invalid amount on row 2"

    def test_error_to_dict(self, normalizer: SpendCSVNormalizer) -> None:
        with pytest.raises(CSVRowParseError) as ctx:
            normalizer.normalize("h\n2026-02-01,ACME,x")

        assert ctx.value.to_dict() == {
            "message": "invalid amount on row 2",
            "row_number": 2,
            "column": "amount",
            "value": "x",
        }
