import json
from pathlib import Path

import pytest

from lead_batcher.config import (
    ConfigurationError,
    Settings,
    coerce_batch_size,
    load_configuration,
    load_settings,
    settings_from_mapping,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, 1000),
        ("", 1000),
        ("abc", 1000),
        (True, 1000),
        ("250", 250),
        (" 40 ", 40),
        ("12.9", 12),
        (500, 500),
        (0, 1),
        ("-3", 1),
        (10**9, 100_000),
    ],
)
def test_coerce_batch_size(value, expected) -> None:
    assert coerce_batch_size(value) == expected


def test_load_configuration_reads_json(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"batch_size": 50, "output_dir": "out"}), encoding="utf-8")

    assert load_configuration(path) == {"batch_size": 50, "output_dir": "out"}


def test_load_configuration_reads_yaml(tmp_path) -> None:
    pytest.importorskip("yaml")
    path = tmp_path / "config.yaml"
    path.write_text("batch_size: 20\nsheet_format: csv\n", encoding="utf-8")

    assert load_configuration(path) == {"batch_size": 20, "sheet_format": "csv"}


def test_load_configuration_errors(tmp_path) -> None:
    with pytest.raises(ConfigurationError):
        load_configuration(tmp_path / "missing.json")

    unsupported = tmp_path / "config.toml"
    unsupported.write_text("batch_size = 1", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_configuration(unsupported)

    not_a_mapping = tmp_path / "list.json"
    not_a_mapping.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_configuration(not_a_mapping)

    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_configuration(broken)


def test_settings_overrides_take_precedence() -> None:
    settings = settings_from_mapping(
        {"batch_size": 10, "output_dir": "from-config", "sheet_format": "CSV"},
        batch_size="25",
        output_dir=None,
    )

    assert settings == Settings(batch_size=25, output_dir=Path("from-config"), sheet_format="csv", sheet_name=0)


def test_settings_reject_unknown_sheet_format() -> None:
    with pytest.raises(ConfigurationError):
        settings_from_mapping({"sheet_format": "ods"})


def test_load_settings_without_file_uses_defaults() -> None:
    assert load_settings() == Settings()
