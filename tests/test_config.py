from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from hunkmend.config import ConfigError, EditSettings, load_settings


def test_load_settings_defaults_when_file_missing(tmp_path: Path) -> None:
    settings = load_settings(tmp_path / "absent.yaml", env={})

    assert settings == EditSettings()
    assert settings.max_patch_bytes == 200_000
    assert settings.allow_partial_writes is False


def test_load_settings_reads_edit_section(tmp_path: Path) -> None:
    config_path = tmp_path / "hunkmend.yaml"
    config_path.write_text(
        textwrap.dedent(
            """
            edit:
              max_patch_bytes: 1024
              allow_partial_writes: true
              log_level: DEBUG
            unrelated:
              key: value
            """
        ).lstrip(),
        encoding="utf-8",
    )

    settings = load_settings(config_path, env={})

    assert settings.max_patch_bytes == 1024
    assert settings.allow_partial_writes is True
    assert settings.log_level == "DEBUG"
    assert settings.enforce_lf is True


def test_load_settings_applies_environment_overrides(tmp_path: Path) -> None:
    config_path = tmp_path / "hunkmend.yaml"
    config_path.write_text("edit:\n  max_patch_bytes: 1024\n", encoding="utf-8")

    settings = load_settings(
        config_path,
        env={"HUNKMEND_MAX_PATCH_BYTES": " 4096 ", "HUNKMEND_ALLOW_PARTIAL": "yes"},
    )

    assert settings.max_patch_bytes == 4096
    assert settings.allow_partial_writes is True


def test_load_settings_ignores_invalid_size_override(tmp_path: Path) -> None:
    settings = load_settings(tmp_path / "absent.yaml", env={"HUNKMEND_MAX_PATCH_BYTES": "lots"})

    assert settings.max_patch_bytes == 200_000


@pytest.mark.parametrize(
    "content",
    [
        "- just\n- a list\n",
        "edit: [1, 2]\n",
        "edit:\n  unknown_flag: true\n",
        "edit: {max_patch_bytes: [}\n",
    ],
)
def test_load_settings_rejects_unusable_config(tmp_path: Path, content: str) -> None:
    config_path = tmp_path / "hunkmend.yaml"
    config_path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_settings(config_path, env={})
