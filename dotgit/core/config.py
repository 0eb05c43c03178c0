"""Configuration management for dotgit.

Repository settings live in .dotgit/config and user-wide settings in
~/.dotgitconfig, both in git-style INI format.
"""

import configparser
import os
from pathlib import Path
from typing import Dict, Optional


class Config:
    """
    Manages dotgit configuration files.

    Lookup order, highest first:
    1. Environment variables (DOTGIT_<SECTION>_<KEY>)
    2. Repository config
    3. Global config
    4. Fallback value
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.dotgitconfig'

    _TRUE = {'1', 'true', 'yes', 'on'}
    _FALSE = {'0', 'false', 'no', 'off'}

    def __init__(self, repo_config_path: Optional[Path] = None):
        """
        Initialize Config manager.

        Args:
            repo_config_path: Path to repository config file, if in a repo
        """
        self.repo_config_path = repo_config_path
        self._global_config = None
        self._repo_config = None

    @staticmethod
    def _read(path: Optional[Path]) -> configparser.ConfigParser:
        parser = configparser.ConfigParser()
        if path is not None and path.exists():
            parser.read(path)
        return parser

    @property
    def global_config(self) -> configparser.ConfigParser:
        """Load and return global configuration."""
        if self._global_config is None:
            self._global_config = self._read(self.GLOBAL_CONFIG_PATH)
        return self._global_config

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        """Load and return repository configuration."""
        if self._repo_config is None and self.repo_config_path:
            self._repo_config = self._read(self.repo_config_path)
        return self._repo_config

    @staticmethod
    def split_key(key: str):
        """
        Split 'section.key' into its parts. Bare keys go to [core].

        Raises:
            ValueError: If either part is empty
        """
        section, option = key.split('.', 1) if '.' in key else ('core', key)
        if not section or not option:
            raise ValueError(f"Invalid config key: {key}")
        return section, option

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Args:
            section: Config section (e.g., 'core')
            key: Config key (e.g., 'ignorecase')
            fallback: Default value if not found

        Returns:
            Configuration value or fallback
        """
        env_value = os.environ.get(f"DOTGIT_{section.upper()}_{key.upper()}")
        if env_value is not None:
            return env_value

        if self.repo_config and self.repo_config.has_option(section, key):
            return self.repo_config.get(section, key)

        if self.global_config.has_option(section, key):
            return self.global_config.get(section, key)

        return fallback

    def get_bool(self, section: str, key: str, fallback: bool = False) -> bool:
        """Get a boolean value; unrecognised strings give the fallback."""
        value = self.get(section, key)
        if value is None:
            return fallback
        value = value.strip().lower()
        if value in self._TRUE:
            return True
        if value in self._FALSE:
            return False
        return fallback

    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """
        Set a configuration value.

        Args:
            section: Config section
            key: Config key
            value: Value to set
            global_config: If True, write to global config; otherwise repo config
        """
        if global_config:
            config = self.global_config
            config_path = self.GLOBAL_CONFIG_PATH
        else:
            if not self.repo_config_path:
                raise ValueError("No repository config path available")
            config = self.repo_config
            config_path = self.repo_config_path

        if not config.has_section(section):
            config.add_section(section)

        config.set(section, key, value)

        with open(config_path, 'w') as f:
            config.write(f)

    def list_all(self, global_only: bool = False) -> Dict[str, Dict[str, str]]:
        """
        List configuration values by scope.

        Returns:
            Dict mapping 'global' and 'repository' to {'section.key': value}
        """
        result = {'global': {}, 'repository': {}}

        for section in self.global_config.sections():
            for key, value in self.global_config.items(section):
                result['global'][f"{section}.{key}"] = value

        if not global_only and self.repo_config:
            for section in self.repo_config.sections():
                for key, value in self.repo_config.items(section):
                    result['repository'][f"{section}.{key}"] = value

        return result


def get_config(repo=None) -> Config:
    """
    Get a Config instance.

    Args:
        repo: Repository instance, or None for global-only config

    Returns:
        Config instance
    """
    if repo:
        return repo.config
    return Config()
