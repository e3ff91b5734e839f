from pathlib import Path

from csv_vcard.config import load_settings, write_default_config
from csv_vcard.fields import DEFAULT_CATALOG


def test_default_config_written_once(tmp_path: Path):
    conf = tmp_path / "local" / "csv-vcard.toml"

    assert write_default_config(conf) is True
    assert conf.exists()
    txt = conf.read_text()
    assert 'encoding = "utf-8-sig"' in txt
    assert "[columns]" in txt
    assert write_default_config(conf) is False

    settings = load_settings(conf)
    assert settings.split is False
    assert settings.phone_region == ""
    assert settings.catalog() == DEFAULT_CATALOG


def test_missing_config_gives_defaults(tmp_path: Path):
    settings = load_settings(tmp_path / "absent.toml")
    assert settings.encoding == "utf-8-sig"
    assert settings.columns == {}


def test_config_overrides(tmp_path: Path):
    conf = tmp_path / "csv-vcard.toml"
    conf.write_text(
        'split = true\nphone_region = " gb "\n[columns]\ndisplay_name = "Name"\n',
        encoding="utf-8",
    )
    settings = load_settings(conf)
    assert settings.split is True
    assert settings.phone_region == "gb"
    assert settings.catalog().display_name == "Name"


def test_malformed_config_falls_back(tmp_path: Path):
    conf = tmp_path / "csv-vcard.toml"
    conf.write_text("split = = true\n", encoding="utf-8")
    assert load_settings(conf).split is False
