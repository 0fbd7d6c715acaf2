from __future__ import annotations

import json

import pytest

from pyx_shared.config import load_import_config
from pyx_shared.exceptions import ConfigurationError
from pyx_shared.models.cards import CardKind


def _write(tmp_path, payload) -> str:
    path = tmp_path / "importer.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def _config(**overrides):
    payload = {
        "replacements": [{"from": "&", "to": "&amp;"}, {"from": "\n", "to": "<br>"}],
        "deck_info": [
            {"id": "base", "name": "Base Game", "watermark": "B", "weight": 1},
            {"id": "misc"},
        ],
        "files": [
            {
                "type": "excel",
                "name": "cards.xlsx",
                "sheets": [
                    {"color": "black", "heading_named_count": 2},
                    {"color": "white", "heading_named_count": 1, "next_column_named_count": 1},
                ],
            }
        ],
    }
    payload.update(overrides)
    return payload


class TestLoadImportConfig:
    def test_loads_valid_config(self, tmp_path):
        config = load_import_config(_write(tmp_path, _config()))

        assert config.replacement_table().entries == (("&", "&amp;"), ("\n", "<br>"))
        sheets = config.files[0].sheets
        assert sheets[0].color is CardKind.BLACK
        assert sheets[0].next_column_named_count == 0
        assert sheets[1].next_column_named_count == 1
        # relative names resolve next to the config file
        assert config.files[0].name == str(tmp_path / "cards.xlsx")

    def test_deck_name_defaults_to_id(self, tmp_path):
        config = load_import_config(_write(tmp_path, _config()))
        aliases = config.alias_table()
        assert aliases.resolve("misc").name == "misc"
        assert aliases.resolve("Base Game").watermark == "B"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc:
            load_import_config(tmp_path / "nope.json")
        assert exc.value.code == "CONFIGURATION_ERROR"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "importer.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_import_config(path)

    @pytest.mark.parametrize(
        "sheet",
        [
            {"color": "black"},
            {"color": "black", "heading_named_count": -1, "next_column_named_count": 2},
            {"color": "grey", "heading_named_count": 1},
            {"color": "white", "heading_named_count": "many"},
        ],
    )
    def test_invalid_sheet_layout(self, tmp_path, sheet):
        payload = _config(files=[{"type": "excel", "name": "cards.xlsx", "sheets": [sheet]}])
        with pytest.raises(ConfigurationError):
            load_import_config(_write(tmp_path, payload))

    def test_requires_files_and_sheets(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_import_config(_write(tmp_path, _config(files=[])))
        with pytest.raises(ConfigurationError):
            load_import_config(
                _write(tmp_path, _config(files=[{"type": "excel", "name": "a.xlsx", "sheets": []}]))
            )

    def test_file_type_is_left_to_the_registry(self, tmp_path):
        payload = _config(files=[{"type": "csv", "name": "a.csv", "sheets": [{"color": "white", "heading_named_count": 1}]}])
        config = load_import_config(_write(tmp_path, payload))
        assert config.files[0].type == "csv"

    def test_replacement_order_is_checked(self, tmp_path):
        payload = _config(replacements=[{"from": "<", "to": "&lt;"}, {"from": "&", "to": "&amp;"}])
        with pytest.raises(ConfigurationError):
            load_import_config(_write(tmp_path, payload))
