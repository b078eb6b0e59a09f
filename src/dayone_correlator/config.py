"""相関処理の設定（config.yml）.

config.yml の例:
    dayonepath: /Users/me/Dropbox/Apps/Day One/Journal.dayone
    output_field: dayones
    duplicate_policy: warn
    extract_titles: true
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml
from loguru import logger

from dayone_correlator.core.exceptions import ConfigError
from dayone_correlator.core.tag_tree import DuplicatePolicy


@dataclass
class CorrelatorConfig:
    """相関処理の設定値."""

    dayone_path: Path | None = None
    output_field: str = "dayones"
    tags_field: str = "tags"
    creation_field: str = "creation_date"
    text_field: str = "entry_text"
    title_field: str = "title_text"
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.WARN
    extract_titles: bool = True


def load_config(config_path: Path | str) -> CorrelatorConfig:
    """config.yml を読み込んで設定を返す.

    Args:
        config_path: 設定ファイルのパス

    Returns:
        読み込んだ設定

    Raises:
        ConfigError: ファイルが無い、dayonepath が無い/ディレクトリでない、値が不正な場合
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Config file must contain a mapping: {config_path}")

    dayone_path = raw.get("dayonepath")
    if dayone_path is None:
        raise ConfigError(f"Missing dayonepath key in {config_path}")

    dayone_path = Path(dayone_path).expanduser()
    if not dayone_path.is_dir():
        raise ConfigError(f"dayonepath must point to an existing directory: {dayone_path}")

    policy = raw.get("duplicate_policy", DuplicatePolicy.WARN.value)
    try:
        duplicate_policy = DuplicatePolicy(str(policy).lower())
    except ValueError as e:
        valid = [p.value for p in DuplicatePolicy]
        raise ConfigError(f"Invalid duplicate_policy '{policy}'. Valid values: {valid}") from e

    config = CorrelatorConfig(
        dayone_path=dayone_path,
        output_field=str(raw.get("output_field", "dayones")),
        duplicate_policy=duplicate_policy,
        extract_titles=bool(raw.get("extract_titles", True)),
    )

    logger.info(f"Loaded config from {config_path} (dayonepath={dayone_path})")
    return config
