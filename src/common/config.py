"""Configuration loader for the sync and matching stages."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

CONFIG_DIR = Path(__file__).resolve().parents[2] / "configs"

# WordPress REST API rejects per_page above 100
MAX_PER_PAGE = 100


@dataclass
class WordPressConfig:
    base_url: str = ""  # e.g. https://example.com/wp-json/wp/v2
    username: str | None = None
    password: str | None = None
    per_page: int = 20
    request_timeout: int = 30
    api_delay: float = 0.1  # seconds between full pages


@dataclass
class DatabaseConfig:
    url: str = "sqlite:///catalog.db"
    echo: bool = False


@dataclass
class MatchWeights:
    """Tunable scoring parameters for linking news candidates to articles.

    The defaults are heuristic values kept for compatibility with existing
    confidence scores; they have no derivation beyond that.
    """
    title_weight: int = 10
    body_weight: int = 2
    cluster_weight: int = 20
    week_bonus: int = 5
    day_bonus: int = 10
    min_score: int = 15  # exclusive
    title_min_length: int = 3  # keep title tokens longer than this
    body_min_length: int = 4  # keep summary tokens longer than this


@dataclass
class SyncConfig:
    max_articles: int = 100
    report_prefix: str = "sync_runs"


@dataclass
class Config:
    wordpress: WordPressConfig = field(default_factory=WordPressConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)
    matching: MatchWeights = field(default_factory=MatchWeights)


def find_config_path(
    config_name: str | None,
    config_dir: Path = CONFIG_DIR,
    default_name: str = "prod",
    env_var: str | None = "CONFIG_ENV",
) -> Path:
    """Find config file path, checking env var and defaults.

    Args:
        config_name: Name of config (without .yaml) or None for default
        config_dir: Directory containing config files
        default_name: Default config name if config_name is None
        env_var: Environment variable to check for config name

    Returns:
        Path to the config file

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    if config_name is None:
        config_name = os.environ.get(env_var, default_name) if env_var else default_name

    config_path = config_dir / f"{config_name}.yaml"
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    return config_path


def load_yaml(path: Path) -> dict:
    """Load YAML file and return dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_config(config_name: str | None = None, config_dir: Path = CONFIG_DIR) -> Config:
    """Load configuration from YAML file, with secrets taken from the environment.

    Args:
        config_name: Name of config file (without .yaml extension).
                    If None, uses CONFIG_ENV env var or "prod".
        config_dir: Directory containing config files

    Returns:
        Loaded Config object
    """
    path = find_config_path(config_name, config_dir)
    return parse_config(load_yaml(path), os.environ)


def parse_config(data: dict, env: dict | None = None) -> Config:
    """Parse config dictionary into Config object.

    Environment values (WORDPRESS_URL, WORDPRESS_USERNAME, WORDPRESS_PASSWORD,
    DATABASE_URL) take precedence over the YAML file.
    """
    env = env or {}
    wp_raw = data.get("wordpress", {}) or {}
    db_raw = data.get("database", {}) or {}
    sync_raw = data.get("sync", {}) or {}
    match_raw = data.get("matching", {}) or {}

    per_page = int(wp_raw.get("per_page", 20))
    if per_page <= 0 or per_page > MAX_PER_PAGE:
        raise ValueError(f"wordpress.per_page must be between 1 and {MAX_PER_PAGE}, got {per_page}")

    wordpress = WordPressConfig(
        base_url=(env.get("WORDPRESS_URL") or wp_raw.get("base_url", "")).rstrip("/"),
        username=env.get("WORDPRESS_USERNAME") or wp_raw.get("username"),
        password=env.get("WORDPRESS_PASSWORD") or wp_raw.get("password"),
        per_page=per_page,
        request_timeout=int(wp_raw.get("request_timeout", 30)),
        api_delay=float(wp_raw.get("api_delay", 0.1)),
    )

    database = DatabaseConfig(
        url=env.get("DATABASE_URL") or db_raw.get("url", "sqlite:///catalog.db"),
        echo=bool(db_raw.get("echo", False)),
    )

    sync = SyncConfig(
        max_articles=int(sync_raw.get("max_articles", 100)),
        report_prefix=sync_raw.get("report_prefix", "sync_runs"),
    )

    defaults = MatchWeights()
    matching = MatchWeights(
        **{
            name: int(match_raw.get(name, getattr(defaults, name)))
            for name in MatchWeights.__dataclass_fields__
        }
    )

    return Config(wordpress=wordpress, database=database, sync=sync, matching=matching)
