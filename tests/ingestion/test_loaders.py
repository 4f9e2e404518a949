import pandas as pd
import pytest

from lead_batcher.ingestion.loaders import RowSourceError, UnsupportedFileTypeError, dataframe_to_rows, load_rows


@pytest.fixture()
def sample_dataframe():
    return pd.DataFrame(
        [
            {"ContactName": "Asha Rao", "Phone2": "9876543210", "City": "Pune"},
            {"ContactName": "Vikram", "Phone2": "", "City": ""},
            {"ContactName": "", "Phone2": "09876543211", "City": "Delhi"},
        ]
    )


def test_load_rows_from_csv_keeps_text_and_empty_cells(sample_dataframe, tmp_path):
    csv_path = tmp_path / "contacts.csv"
    sample_dataframe.to_csv(csv_path, index=False)

    rows = load_rows(csv_path)

    assert rows == [
        {"ContactName": "Asha Rao", "Phone2": "9876543210", "City": "Pune"},
        {"ContactName": "Vikram", "Phone2": "", "City": ""},
        {"ContactName": "", "Phone2": "09876543211", "City": "Delhi"},
    ]


def test_load_rows_from_excel_does_not_turn_numbers_into_floats(tmp_path):
    excel_path = tmp_path / "contacts.xlsx"
    pd.DataFrame(
        {"Contact Name": ["Asha", "Vikram"], "Phone 2": [9876543210, None]}
    ).to_excel(excel_path, index=False)

    rows = load_rows(excel_path)

    assert [row["Contact Name"] for row in rows] == ["Asha", "Vikram"]
    assert rows[0]["Phone 2"] == "9876543210"
    assert rows[1]["Phone 2"] == ""
    assert all(set(row) == {"Contact Name", "Phone 2"} for row in rows)


def test_load_rows_from_tsv(tmp_path):
    tsv_path = tmp_path / "contacts.tsv"
    tsv_path.write_text("ContactName\tPhone2\nAsha\t98765 43210\n", encoding="utf-8")

    assert load_rows(tsv_path) == [{"ContactName": "Asha", "Phone2": "98765 43210"}]


def test_empty_csv_yields_no_rows(tmp_path):
    csv_path = tmp_path / "empty.csv"
    csv_path.write_text("", encoding="utf-8")

    assert load_rows(csv_path) == []


def test_dataframe_to_rows_fills_missing_values():
    frame = pd.DataFrame({"ContactName": ["Asha", None], "Phone2": [float("nan"), 9876543210.0]})

    assert dataframe_to_rows(frame) == [
        {"ContactName": "Asha", "Phone2": ""},
        {"ContactName": "", "Phone2": "9876543210"},
    ]


def test_unsupported_file_extension(tmp_path):
    bad_path = tmp_path / "contacts.json"
    bad_path.write_text("{}", encoding="utf-8")

    with pytest.raises(UnsupportedFileTypeError):
        load_rows(bad_path)


def test_unreadable_files_raise_row_source_error(tmp_path):
    with pytest.raises(RowSourceError):
        load_rows(tmp_path / "missing.csv")

    broken = tmp_path / "broken.xlsx"
    broken.write_bytes(b"not a workbook")
    with pytest.raises(RowSourceError):
        load_rows(broken)


@pytest.mark.parametrize("suffix", [".xls", ".xlsb"])
def test_legacy_excel_formats_are_unsupported(tmp_path, suffix):
    legacy_path = tmp_path / f"contacts{suffix}"
    legacy_path.write_bytes(b"legacy workbook")

    with pytest.raises(UnsupportedFileTypeError):
        load_rows(legacy_path)
