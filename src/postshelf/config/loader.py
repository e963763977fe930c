"""Configuration file discovery and initialization."""

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Package defaults directory
PACKAGE_DIR = Path(__file__).parent.parent
DEFAULTS_DIR = PACKAGE_DIR / "defaults"

CONFIG_DIRNAME = ".postshelf"
SETTINGS_FILENAME = "postshelf.yaml"


@dataclass
class ConfigPaths:
    """Discovered configuration paths."""

    # Directories
    local_dir: Optional[Path] = None  # .postshelf/ in current directory
    user_dir: Optional[Path] = None  # ~/.config/postshelf/
    package_dir: Path = DEFAULTS_DIR  # Package defaults

    # Specific files (resolved from directories)
    env_file: Optional[Path] = None
    settings_file: Optional[Path] = None

    def __post_init__(self):
        """Resolve file paths from directories."""
        # Priority: local > user > package
        self.env_file = self._find_file(".env")
        self.settings_file = self._find_file(SETTINGS_FILENAME)

    def _find_file(self, filename: str) -> Optional[Path]:
        """Find a config file in priority order."""
        for directory in (self.local_dir, self.user_dir, self.package_dir):
            if directory:
                candidate = directory / filename
                if candidate.exists():
                    return candidate
        return None


def get_config_paths(base_dir: Optional[Path] = None) -> ConfigPaths:
    """
    Discover configuration paths.

    Priority order (highest to lowest):
    1. .postshelf/ in the site directory (default: current directory)
    2. ~/.config/postshelf/
    3. Package defaults

    Returns:
        ConfigPaths with discovered locations
    """
    local_dir = (base_dir or Path.cwd()) / CONFIG_DIRNAME
    local_dir = local_dir if local_dir.exists() else None

    user_dir = Path.home() / ".config" / "postshelf"
    user_dir = user_dir if user_dir.exists() else None

    return ConfigPaths(
        local_dir=local_dir,
        user_dir=user_dir,
        package_dir=DEFAULTS_DIR,
    )


def init_local_config(target_dir: Optional[Path] = None) -> bool:
    """
    Initialize local configuration in the specified or current directory.

    Creates .postshelf/ with a settings template and a .env stub.

    Args:
        target_dir: Directory to initialize (default: current directory)

    Returns:
        True if successful
    """
    if target_dir is None:
        target_dir = Path.cwd()

    config_dir = target_dir / CONFIG_DIRNAME

    if config_dir.exists():
        print(f"Configuration already exists at {config_dir}")
        print("Delete it first if you want to reinitialize.")
        return False

    print(f"Initializing postshelf configuration in {config_dir}")

    try:
        config_dir.mkdir(parents=True)

        env_content = """\
# postshelf local overrides (environment variables win over postshelf.yaml)

# POSTSHELF_POSTS_DIRS=_posts,_drafts
# POSTSHELF_CODE_THEME=monokai
# POSTSHELF_THEME=default
# POSTSHELF_REQUIRE_TAGS=false
# POSTSHELF_LOG_LEVEL=WARNING
"""
        (config_dir / ".env").write_text(env_content)

        template = DEFAULTS_DIR / SETTINGS_FILENAME
        if template.exists():
            shutil.copyfile(template, config_dir / SETTINGS_FILENAME)

        print("\nCreated configuration files:")
        print(f"  {config_dir}/.env             - environment overrides")
        print(f"  {config_dir}/{SETTINGS_FILENAME}  - content and lint settings")
        print("\nNext steps:")
        print(f"  1. Edit {config_dir}/{SETTINGS_FILENAME} to match your site layout")
        print("  2. Run 'postshelf --lint' before publishing")

        return True

    except OSError as e:
        print(f"Error creating configuration: {e}")
        if config_dir.exists():
            shutil.rmtree(config_dir)
        return False

