from __future__ import annotations
import json
from pathlib import Path
import pandas as pd
import pytest
from paramgen.services.converter import (
    WriteError,
    build_document,
    convert,
    convert_with_result,
    output_filename,
)
from paramgen.tabular.reader import InputError, rows_from_dataframe


def test_output_filename_no_padding():
    """Filenames are prefix + index + '.json' with no padding."""
    assert output_filename("item-", 0) == "item-0.json"
    assert output_filename("cfg-", 12) == "cfg-12.json"
    assert output_filename("", 3) == "3.json"


def test_build_document_one_entry_per_column():
    """Each column becomes one parameter, in column order."""
    doc = build_document({"vmName": "vm01", "size": "small"})
    assert doc.parameters == {"vmName": {"value": "vm01"}, "size": {"value": "small"}}
    assert list(doc.parameters.keys()) == ["vmName", "size"]


def test_convert_writes_files_in_row_order(temp_workdir: Path):
    """Files are written and listed in row order."""
    rows = [{"n": "a"}, {"n": "b"}, {"n": "c"}]
    manifest = convert(rows)
    assert manifest == ["item-0.json", "item-1.json", "item-2.json"]
    for i, name in enumerate(manifest):
        data = json.loads((temp_workdir / name).read_text(encoding="utf-8"))
        assert data["parameters"] == {"n": {"value": rows[i]["n"]}}


def test_convert_counter_ignores_row_content(temp_workdir: Path):
    """The counter comes from position, not row values."""
    manifest = convert([{"id": "42"}, {"id": "7"}], "vm-")
    assert manifest == ["vm-0.json", "vm-1.json"]


def test_convert_output_dir_created(temp_workdir: Path):
    """A missing output directory is created."""
    target = temp_workdir / "nested" / "params"
    manifest = convert([{"a": "1"}], output_dir=target)
    assert manifest == ["item-0.json"]
    assert (target / "item-0.json").exists()
    assert not (temp_workdir / "item-0.json").exists()


def test_convert_overwrites_existing(temp_workdir: Path):
    """Existing files with the same name are overwritten."""
    (temp_workdir / "item-0.json").write_text("stale", encoding="utf-8")
    convert([{"a": "fresh"}])
    data = json.loads((temp_workdir / "item-0.json").read_text(encoding="utf-8"))
    assert data["parameters"]["a"]["value"] == "fresh"


def test_convert_indent(temp_workdir: Path):
    """indent is applied to written files."""
    convert([{"a": "1"}], indent=4)
    text = (temp_workdir / "item-0.json").read_text(encoding="utf-8")
    assert "\n    \"contentVersion\"" in text


@pytest.mark.parametrize("rows", [None, []])
def test_convert_rejects_missing_rows(temp_workdir: Path, rows):
    """None or empty rows raise InputError without writing."""
    with pytest.raises(InputError):
        convert(rows)
    assert list(temp_workdir.glob("*.json")) == []


def test_convert_write_failure_keeps_earlier_files(temp_workdir: Path):
    """A failing write stops the run and keeps earlier files."""
    # a directory squatting on the second filename makes that write fail
    (temp_workdir / "item-1.json").mkdir()
    rows = [{"a": "1"}, {"a": "2"}, {"a": "3"}]
    with pytest.raises(WriteError) as e:
        convert(rows)
    assert e.value.row_index == 1
    assert e.value.filename == "item-1.json"
    assert "could not write output 1 (item-1.json)" in str(e.value)
    assert isinstance(e.value.__cause__, OSError)
    assert (temp_workdir / "item-0.json").is_file()
    # processing stopped at the failing row
    assert not (temp_workdir / "item-2.json").exists()


def test_convert_unserializable_value_is_write_error(temp_workdir: Path):
    """An unserializable value fails its row as a WriteError."""
    with pytest.raises(WriteError) as e:
        convert([{"a": "1"}, {"a": object()}])
    assert e.value.row_index == 1
    assert isinstance(e.value.__cause__, TypeError)


def test_convert_with_result_metrics(temp_workdir: Path):
    """convert_with_result reports manifest and timing."""
    result = convert_with_result([{"a": "1"}, {"a": "2"}], "cfg-", output_dir="out")
    assert result.manifest == ["cfg-0.json", "cfg-1.json"]
    assert result.total_rows == 2
    assert result.output_prefix == "cfg-"
    assert result.output_directory == "out"
    assert result.elapsed_seconds >= 0
    assert result.end_time >= result.start_time


def test_convert_dataframe_nan_is_write_error(temp_workdir: Path):
    """A NaN cell cannot become JSON text, so its row fails and earlier files stay."""
    rows = rows_from_dataframe(pd.DataFrame({"a": ["x", None], "b": [1.5, float("nan")]}))
    with pytest.raises(WriteError) as e:
        convert(rows)
    assert e.value.row_index == 1
    assert isinstance(e.value.__cause__, ValueError)
    # row 0 was valid JSON; row 1 was never written
    json.loads((temp_workdir / "item-0.json").read_text(encoding="utf-8"))
    assert not (temp_workdir / "item-1.json").exists()
