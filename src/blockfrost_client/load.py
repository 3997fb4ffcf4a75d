"""設定ファイル・環境変数の読み込み"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError, LocalIoError
from .settings import Settings

PROJECT_ID_ENV = "BLOCKFROST_PROJECT_ID"


def load_project_id(environ: Mapping[str, str] | None = None) -> str | None:
    """Read the project id from ``BLOCKFROST_PROJECT_ID``; ``None`` when unset or blank."""
    env = os.environ if environ is None else environ
    value = env.get(PROJECT_ID_ENV, "").strip()
    return value or None


def _read_yaml(path: Path) -> dict[str, Any]:
    """YAML ファイルを読み込む。"""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LocalIoError(path, e) from e
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML: {path}", cause=e) from e
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file must contain a mapping: {path}")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_settings(
    base_path: Path,
    env_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """設定ファイルを読み込んで Settings を返す。

    base_path: ベース設定ファイルパス（必須）
    env_path: 環境別設定ファイルパス（オプション）。存在する場合はベースにマージ。

    ``BLOCKFROST_PROJECT_ID`` takes precedence over ``project_id`` in the files.
    """
    data = _read_yaml(base_path)
    if env_path is not None and env_path.exists():
        data = _deep_merge(data, _read_yaml(env_path))
    project_id = load_project_id(environ)
    if project_id is not None:
        data["project_id"] = project_id
    return settings_from_dict(data)


def settings_from_dict(data: Mapping[str, Any]) -> Settings:
    try:
        return Settings.model_validate(dict(data))
    except ValidationError as e:
        raise ConfigError(f"Settings validation failed: {e}", cause=e) from e


def settings_from_env(environ: Mapping[str, str] | None = None) -> Settings:
    """Build settings from ``BLOCKFROST_PROJECT_ID`` alone."""
    project_id = load_project_id(environ)
    if project_id is None:
        raise ConfigError(f"{PROJECT_ID_ENV} is not set")
    return settings_from_dict({"project_id": project_id})
