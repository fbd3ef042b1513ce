"""Configuration loading."""

from pathlib import Path

import pytest

from paralevel.config import CONFIG_ENV, Config, ConfigError, load_config


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV, raising=False)


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path) == Config()


def test_values_read_from_work_dir(tmp_path):
    (tmp_path / ".paralevel.yml").write_text(
        "logging:\n"
        "  level: debug\n"
        "  file: run.log\n"
        "new_level:\n"
        "  width: 12\n"
        "editor:\n"
        "  block_size: 5\n"
    )
    cfg = load_config(tmp_path)

    assert cfg.log_level == "DEBUG"
    assert cfg.log_file == Path("run.log")
    assert cfg.new_level_width == 12
    assert cfg.new_level_height == 9
    assert cfg.block_size == 5


def test_env_var_overrides_location(tmp_path, monkeypatch):
    custom = tmp_path / "custom.yml"
    custom.write_text("editor:\n  block_size: 4\n")
    monkeypatch.setenv(CONFIG_ENV, str(custom))

    assert load_config(tmp_path / "elsewhere").block_size == 4


def test_empty_file_gives_defaults(tmp_path):
    (tmp_path / ".paralevel.yml").write_text("")
    assert load_config(tmp_path) == Config()


@pytest.mark.parametrize(
    "text",
    [
        "- a\n- b\n",
        "editor: 3\n",
        "editor:\n  block_size: 0\n",
        "new_level:\n  width: wide\n",
        "logging:\n  level: LOUD\n",
        "editor: [\n",
    ],
)
def test_malformed_config(tmp_path, text):
    (tmp_path / ".paralevel.yml").write_text(text)
    with pytest.raises(ConfigError):
        load_config(tmp_path)
