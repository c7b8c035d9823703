from datetime import time

import openpyxl
import pandas as pd
import pytest

from fileflow.errors import ValidationError
from fileflow.files.parser import column_names, is_supported, read_rows


def test_csv_cells_are_text(tmp_path):
    path = tmp_path / "in.csv"
    path.write_text("name,score\nAda,10\nBob,\n")
    assert list(read_rows(str(path), "in.csv")) == [
        {"name": "Ada", "score": "10"},
        {"name": "Bob", "score": ""},
    ]


def test_excel_first_sheet_with_blanks(tmp_path):
    path = tmp_path / "in.xlsx"
    with pd.ExcelWriter(path) as writer:
        pd.DataFrame({"city": ["Oslo", "Rome"], "temp": [3.5, None]}).to_excel(writer, sheet_name="first", index=False)
        pd.DataFrame({"ignored": [1]}).to_excel(writer, sheet_name="second", index=False)

    assert list(read_rows(str(path), "in.xlsx")) == [
        {"city": "Oslo", "temp": 3.5},
        {"city": "Rome", "temp": None},
    ]


def test_rows_are_produced_lazily(tmp_path):
    rows = read_rows(str(tmp_path / "absent.csv"), "absent.csv")
    with pytest.raises(ValidationError):
        next(rows)


def test_unknown_extension(tmp_path):
    path = tmp_path / "in.json"
    path.write_text("{}")
    with pytest.raises(ValidationError):
        list(read_rows(str(path), "in.json"))


def test_empty_csv(tmp_path):
    path = tmp_path / "in.csv"
    path.write_text("")
    with pytest.raises(ValidationError):
        list(read_rows(str(path), "in.csv"))


def test_is_supported():
    assert is_supported("A.XLSX")
    assert is_supported("data", "text/csv")
    assert not is_supported("notes.txt", "text/plain")


def test_column_names_first_seen_order():
    rows = [{"b": 1, "a": 2}, {"a": 3, "c": 4}]
    assert column_names(rows) == ["b", "a", "c"]


def test_excel_dates_and_blank_dates(tmp_path):
    path = tmp_path / "days.xlsx"
    frame = pd.DataFrame({"day": [pd.Timestamp("2024-01-01"), pd.NaT], "n": [1, 2]})
    frame.to_excel(path, index=False)

    rows = list(read_rows(str(path), "days.xlsx"))
    assert rows[0]["day"] == "2024-01-01T00:00:00"
    assert rows[1] == {"day": None, "n": 2}


def test_excel_time_of_day_cells(tmp_path):
    path = tmp_path / "shifts.xlsx"
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.append(["start", "staff"])
    ws.append([time(9, 30), 3])
    wb.save(path)

    assert list(read_rows(str(path), "shifts.xlsx")) == [{"start": "09:30:00", "staff": 3}]
