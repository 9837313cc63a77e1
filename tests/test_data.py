import math

import pandas as pd
import pytest

from analytics.data import (
    MissingFieldError,
    SheetTable,
    coerce_numeric,
    field_series,
    field_value,
    format_fixed,
    parse_numeric,
    parse_threshold,
    percentage,
    records_frame,
    require_fields,
    rows_to_records,
)


def test_rows_to_records_uses_header_row_verbatim():
    table = rows_to_records([["Year", " Program ", "Attendance %"], ["2023", "CS", "88"]])
    assert table.headers == ["Year", " Program ", "Attendance %"]
    assert table.records == [{"Year": "2023", " Program ": "CS", "Attendance %": "88"}]


def test_rows_to_records_pads_short_rows_with_empty_strings():
    table = rows_to_records([["A", "B", "C"], ["1"], ["1", None, "3"]])
    assert table.records == [{"A": "1", "B": "", "C": ""}, {"A": "1", "B": "", "C": "3"}]


def test_rows_to_records_ignores_cells_beyond_header():
    table = rows_to_records([["A"], ["1", "extra"]])
    assert table.records == [{"A": "1"}]


@pytest.mark.parametrize("rows", [None, [], [["Year", "Program"]]])
def test_rows_to_records_empty_or_header_only(rows):
    table = rows_to_records(rows)
    assert table.records == []
    assert len(table) == 0


def test_rows_to_records_stringifies_non_string_cells():
    table = rows_to_records([["Year", "Marks"], [2023, 81.5]])
    assert table.records == [{"Year": "2023", "Marks": "81.5"}]


def test_field_value_falls_back_to_next_non_empty_name():
    record = {"program": "", "Program": "CS"}
    assert field_value(record, ("program", "Program")) == "CS"
    assert field_value(record, "missing") == ""
    assert field_value(record, "missing", default="Unknown") == "Unknown"


def test_field_series_prefers_first_name_per_row():
    df = records_frame(rows_to_records([["program", "Program"], ["CS", "IT"], ["", "ME"], ["", ""]]))
    assert field_series(df, ("program", "Program")).tolist() == ["CS", "ME", ""]
    assert field_series(df, ("program", "Program"), default="Unknown").tolist() == ["CS", "ME", "Unknown"]


def test_field_series_for_absent_column_is_empty_strings():
    df = records_frame(rows_to_records([["Year"], ["2023"]]))
    assert field_series(df, "Batch").tolist() == [""]


def test_records_frame_empty_table_keeps_columns():
    df = records_frame(SheetTable(headers=["Year", "Program"], records=[]))
    assert df.empty
    assert list(df.columns) == ["Year", "Program"]


def test_parse_numeric_reads_leading_number():
    values = pd.Series(["70", "80", "", "abc", "85%", " 12.5 LPA", "1e2", "-3", ".5"])
    parsed = parse_numeric(values).tolist()
    assert parsed[:2] == [70.0, 80.0]
    assert math.isnan(parsed[2]) and math.isnan(parsed[3])
    assert parsed[4:] == [85.0, 12.5, 100.0, -3.0, 0.5]


def test_parse_numeric_integer_truncates_at_decimal_point():
    parsed = parse_numeric(pd.Series(["50", "12.9", "x"]), integer=True).tolist()
    assert parsed[:2] == [50.0, 12.0]
    assert math.isnan(parsed[2])


def test_coerce_numeric_substitutes_zero():
    assert coerce_numeric(pd.Series(["70", "80", "null"])).tolist() == [70.0, 80.0, 0.0]


def test_parse_numeric_empty_series():
    assert parse_numeric(pd.Series([], dtype=object)).empty


@pytest.mark.parametrize(
    "raw, expected",
    [("4", 4.0), (" 7.5 ", 7.5), ("abc", None), (None, None), (3, 3.0)],
)
def test_parse_threshold(raw, expected):
    assert parse_threshold(raw) == expected


@pytest.mark.parametrize(
    "value, digits, expected",
    [
        (200 / 3, 2, "66.67"),
        (100 / 3, 2, "33.33"),
        (0.125, 2, "0.13"),
        (1.005, 2, "1.00"),
        (50, 2, "50.00"),
        (-0.001, 2, "0.00"),
        (100 / 3, 1, "33.3"),
        (float("nan"), 2, "0.00"),
    ],
)
def test_format_fixed(value, digits, expected):
    assert format_fixed(value, digits) == expected


def test_percentage_is_clamped_and_zero_safe():
    assert percentage(1, 0) == 0.0
    assert percentage(3, 2) == 100.0
    assert percentage(-1, 2) == 0.0
    assert percentage(1, 4) == 25.0


def test_require_fields_raises_for_absent_header():
    table = rows_to_records([["Year", "Program"], ["2023", "CS"]])
    with pytest.raises(MissingFieldError) as err:
        require_fields("admission-trends", table, {"admitted": "Students Admitted"})
    assert err.value.dashboard == "admission-trends"
    assert err.value.field_name == "admitted"
    assert "Students Admitted" in str(err.value)


def test_require_fields_accepts_any_fallback_candidate():
    table = rows_to_records([["Program"], ["CS"]])
    require_fields("placement-analysis", table, {"program": ("program", "Program")})


def test_require_fields_skips_sheets_without_data_rows():
    require_fields("admission-trends", rows_to_records([["Year"]]), {"admitted": "Students Admitted"})

