from pathlib import Path

import pytest

from svgshrink.config import ShrinkConfig, load_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path: Path):
    for name in ("SVGSHRINK_CONFIG", "SVGSHRINK_EXTENSION", "SVGSHRINK_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults():
    assert load_config() == ShrinkConfig(extension=".svg", log_level="info")


def test_toml_file(tmp_path: Path):
    cfg = tmp_path / "custom.toml"
    cfg.write_text('extension = "svgz"\nlog_level = "DEBUG"\n', encoding="utf-8")

    assert load_config(str(cfg)) == ShrinkConfig(extension=".svgz", log_level="debug")


def test_default_file_in_cwd(tmp_path: Path):
    (tmp_path / "svgshrink.toml").write_text('log_level = "warning"\n', encoding="utf-8")
    assert load_config().log_level == "warning"


def test_env_config_path_and_overrides(monkeypatch, tmp_path: Path):
    cfg = tmp_path / "env.toml"
    cfg.write_text('extension = ".xml"\n', encoding="utf-8")
    monkeypatch.setenv("SVGSHRINK_CONFIG", str(cfg))
    assert load_config().extension == ".xml"

    monkeypatch.setenv("SVGSHRINK_EXTENSION", ".SVG")
    monkeypatch.setenv("SVGSHRINK_LOG_LEVEL", "ERROR")
    assert load_config() == ShrinkConfig(extension=".SVG", log_level="error")


def test_invalid_extension(monkeypatch):
    monkeypatch.setenv("SVGSHRINK_EXTENSION", ".")
    with pytest.raises(ValueError):
        load_config()
