"""Settings management for postshelf."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from postshelf.content.lint import LintConfig
from postshelf.content.scanner import DEFAULT_POST_EXTENSIONS, DEFAULT_POSTS_DIRS

from .loader import ConfigPaths, get_config_paths

logger = logging.getLogger(__name__)

TRUE_VALUES = {"1", "true", "yes", "y", "on"}
FALSE_VALUES = {"0", "false", "no", "n", "off"}


@dataclass
class Settings:
    """Application settings loaded from environment and config files."""

    # Paths
    base_dir: Path = field(default_factory=Path.cwd)
    config_paths: Optional[ConfigPaths] = None

    # Content layout
    posts_dirs: list[str] = field(default_factory=lambda: list(DEFAULT_POSTS_DIRS))
    extensions: list[str] = field(default_factory=lambda: sorted(DEFAULT_POST_EXTENSIONS))
    ignore_patterns: list[str] = field(default_factory=list)

    # Rendering
    code_theme: str = "monokai"
    theme: str = "default"

    # Lint policy
    lint: LintConfig = field(default_factory=LintConfig)

    # Runtime
    verbose: bool = False
    log_level: str = "WARNING"


def _parse_bool(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    return default


def _as_str_list(value: Any) -> Optional[list[str]]:
    """Accept a YAML list or comma-separated string; None if unusable."""
    if isinstance(value, str):
        items = [item.strip() for item in value.split(",")]
    elif isinstance(value, list):
        items = [str(item).strip() for item in value if item is not None]
    else:
        return None
    return [item for item in items if item]


def load_settings_file(settings_file: Optional[Path]) -> dict[str, Any]:
    """Load postshelf.yaml; a missing or broken file yields an empty dict."""
    if not settings_file or not settings_file.exists():
        return {}

    try:
        with open(settings_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Ignoring unreadable settings file {settings_file}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Ignoring settings file {settings_file}: expected a mapping")
        return {}
    return data


def load_lint_config(data: Any) -> LintConfig:
    """Build the lint policy from the ``lint:`` section."""
    config = LintConfig()
    if not isinstance(data, dict):
        return config
    for key in ("require_tags", "require_code_language", "check_assets", "check_filename_date"):
        value = data.get(key)
        if isinstance(value, bool):
            setattr(config, key, value)
    return config


def load_settings(base_dir: Optional[Path] = None) -> Settings:
    """
    Load settings from all configuration sources.

    Priority (highest to lowest):
    1. Environment variables (including from .env files)
    2. Local .postshelf/ directory
    3. User ~/.config/postshelf/ directory
    4. Package defaults
    """
    base_dir = (base_dir or Path.cwd()).resolve()
    paths = get_config_paths(base_dir)

    if paths.env_file:
        load_dotenv(paths.env_file, override=True)

    data = load_settings_file(paths.settings_file)
    settings = Settings(base_dir=base_dir, config_paths=paths)

    posts_dirs = _as_str_list(data.get("posts_dirs"))
    if posts_dirs:
        settings.posts_dirs = posts_dirs
    extensions = _as_str_list(data.get("extensions"))
    if extensions:
        settings.extensions = extensions
    ignore_patterns = _as_str_list(data.get("ignore_patterns"))
    if ignore_patterns is not None:
        settings.ignore_patterns = ignore_patterns
    if isinstance(data.get("code_theme"), str):
        settings.code_theme = data["code_theme"]
    if isinstance(data.get("theme"), str):
        settings.theme = data["theme"]
    settings.lint = load_lint_config(data.get("lint"))

    # Environment overrides
    env_posts_dirs = _as_str_list(os.getenv("POSTSHELF_POSTS_DIRS", ""))
    if env_posts_dirs:
        settings.posts_dirs = env_posts_dirs
    settings.code_theme = os.getenv("POSTSHELF_CODE_THEME", "").strip() or settings.code_theme
    settings.theme = os.getenv("POSTSHELF_THEME", "").strip() or settings.theme
    settings.lint.require_tags = _parse_bool(
        os.getenv("POSTSHELF_REQUIRE_TAGS"), settings.lint.require_tags
    )
    settings.log_level = os.getenv("POSTSHELF_LOG_LEVEL", "").strip().upper() or "WARNING"

    return settings


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Reset global settings (useful for testing or directory change)."""
    global _settings
    _settings = None
