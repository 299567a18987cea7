#!/usr/bin/env python3
"""
reconstrap Configuration Management
Handles .reconstrap.yml configuration files
"""

import yaml
from pathlib import Path
from typing import Dict, List, Optional, Any, Tuple
from dataclasses import dataclass, field


DEFAULT_VERIFY_TOOLS = ["subfinder", "assetfinder", "amass", "nuclei", "nmap", "httpx"]


def parse_version_pair(value: Any) -> Tuple[int, int]:
    """Parse '1.21' (or [1, 21]) into a (major, minor) tuple"""
    if isinstance(value, (list, tuple)):
        parts = [str(p) for p in value]
    else:
        parts = str(value).strip().lstrip('v').split('.')
    if len(parts) < 2:
        raise ValueError(f"Expected MAJOR.MINOR, got {value!r}")
    return int(parts[0]), int(parts[1])


@dataclass
class ReconstrapConfig:
    """reconstrap configuration structure"""

    # Go runtime
    # None = use the version pinned in tool-versions.lock
    runtime_version: Optional[str] = None
    runtime_min_version: Tuple[int, int] = (1, 21)
    runtime_install_root: str = "/usr/local"
    runtime_download_url: str = "https://go.dev/dl/go{version}.{os}-{arch}.tar.gz"

    # Go workspace (GOPATH)
    gopath: str = "~/go"

    # Shell startup files; the first one is always written, the rest only if present
    profiles: List[str] = field(default_factory=lambda: ["~/.bashrc", "~/.zshrc"])

    # Directory that receives convenience symlinks
    alias_dir: str = "~/.local/bin"

    # Tool installed from a git checkout instead of `go install`
    cloned_tool_name: str = "eyewitness"
    cloned_tool_repository: str = "https://github.com/RedSiege/EyeWitness.git"
    cloned_tool_directory: str = "~/EyeWitness"
    cloned_tool_entry: str = "Python/EyeWitness.py"
    cloned_tool_setup_dir: str = "Python/setup"

    # Tools the verifier expects on PATH
    verify_tools: List[str] = field(default_factory=lambda: list(DEFAULT_VERIFY_TOOLS))

    # Additional OS packages per package manager, e.g. {'apt': ['jq']}
    extra_packages: Dict[str, List[str]] = field(default_factory=dict)

    # Command execution
    installation_use_sudo: bool = True
    installation_quiet_mode: bool = False
    installation_retry_on_failure: int = 1
    installation_continue_on_tool_failure: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ReconstrapConfig':
        """Create config from dictionary"""
        config = cls()

        runtime = data.get('runtime', {}) or {}
        if runtime.get('version'):
            config.runtime_version = str(runtime['version'])
        if 'min_version' in runtime:
            try:
                config.runtime_min_version = parse_version_pair(runtime['min_version'])
            except (TypeError, ValueError):
                print(f"Warning: invalid runtime.min_version {runtime['min_version']!r}, using default")
        config.runtime_install_root = runtime.get('install_root', config.runtime_install_root)
        config.runtime_download_url = runtime.get('download_url', config.runtime_download_url)

        workspace = data.get('workspace', {}) or {}
        config.gopath = workspace.get('gopath', config.gopath)

        if data.get('profiles'):
            config.profiles = list(data['profiles'])
        config.alias_dir = data.get('alias_dir', config.alias_dir)

        cloned = data.get('cloned_tool', {}) or {}
        config.cloned_tool_name = cloned.get('name', config.cloned_tool_name)
        config.cloned_tool_repository = cloned.get('repository', config.cloned_tool_repository)
        config.cloned_tool_directory = cloned.get('directory', config.cloned_tool_directory)
        config.cloned_tool_entry = cloned.get('entry', config.cloned_tool_entry)
        config.cloned_tool_setup_dir = cloned.get('setup_dir', config.cloned_tool_setup_dir)

        verify = data.get('verify', {}) or {}
        if verify.get('tools'):
            config.verify_tools = list(verify['tools'])

        packages = data.get('packages', {}) or {}
        config.extra_packages = {
            pm: list(names) for pm, names in (packages.get('extra', {}) or {}).items()
        }

        installation = data.get('installation', {}) or {}
        config.installation_use_sudo = bool(installation.get('use_sudo', config.installation_use_sudo))
        config.installation_quiet_mode = bool(installation.get('quiet_mode', config.installation_quiet_mode))
        retry_count = installation.get('retry_on_failure', config.installation_retry_on_failure)
        try:
            config.installation_retry_on_failure = max(1, int(retry_count))
        except (TypeError, ValueError):
            config.installation_retry_on_failure = 1
        config.installation_continue_on_tool_failure = bool(
            installation.get('continue_on_tool_failure', config.installation_continue_on_tool_failure)
        )

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for YAML export"""
        return {
            'runtime': {
                'version': self.runtime_version,
                'min_version': f"{self.runtime_min_version[0]}.{self.runtime_min_version[1]}",
                'install_root': self.runtime_install_root,
                'download_url': self.runtime_download_url,
            },
            'workspace': {
                'gopath': self.gopath,
            },
            'profiles': self.profiles,
            'alias_dir': self.alias_dir,
            'cloned_tool': {
                'name': self.cloned_tool_name,
                'repository': self.cloned_tool_repository,
                'directory': self.cloned_tool_directory,
                'entry': self.cloned_tool_entry,
                'setup_dir': self.cloned_tool_setup_dir,
            },
            'verify': {
                'tools': self.verify_tools,
            },
            'packages': {
                'extra': self.extra_packages,
            },
            'installation': {
                'use_sudo': self.installation_use_sudo,
                'quiet_mode': self.installation_quiet_mode,
                'retry_on_failure': self.installation_retry_on_failure,
                'continue_on_tool_failure': self.installation_continue_on_tool_failure,
            },
        }

    def expand(self, value: str, home: Path) -> Path:
        """Resolve a configured path, treating ~ as the given home directory"""
        if value == '~':
            return home
        if value.startswith('~/'):
            return home / value[2:]
        return Path(value)

    @property
    def runtime_bin_dir(self) -> Path:
        return Path(self.runtime_install_root) / 'go' / 'bin'


class ConfigManager:
    """Manage reconstrap configuration files"""

    DEFAULT_CONFIG_NAME = ".reconstrap.yml"

    @staticmethod
    def find_config(start_path: Path = None) -> Optional[Path]:
        """
        Find .reconstrap.yml by walking up directory tree

        Args:
            start_path: Starting directory (default: current directory)

        Returns:
            Path to .reconstrap.yml or None if not found
        """
        current = start_path or Path.cwd()

        while current != current.parent:
            config_file = current / ConfigManager.DEFAULT_CONFIG_NAME
            if config_file.exists():
                return config_file
            current = current.parent

        return None

    @staticmethod
    def load_config(config_path: Path = None) -> ReconstrapConfig:
        """
        Load configuration from .reconstrap.yml

        Args:
            config_path: Path to config file (default: search from current dir)

        Returns:
            ReconstrapConfig object
        """
        if config_path is None:
            config_path = ConfigManager.find_config()

        if config_path is None or not config_path.exists():
            return ReconstrapConfig()

        try:
            with open(config_path, 'r') as f:
                data = yaml.safe_load(f)

            if data is None:
                return ReconstrapConfig()

            return ReconstrapConfig.from_dict(data)

        except (OSError, yaml.YAMLError, AttributeError) as e:
            print(f"Warning: Failed to load config from {config_path}: {e}")
            return ReconstrapConfig()

    @staticmethod
    def save_config(config: ReconstrapConfig, config_path: Path) -> bool:
        """
        Save configuration to .reconstrap.yml

        Returns:
            True if successful
        """
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)

            with open(config_path, 'w') as f:
                yaml.dump(
                    config.to_dict(),
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                    indent=2
                )

            return True

        except OSError as e:
            print(f"Error: Failed to save config to {config_path}: {e}")
            return False

    @staticmethod
    def create_default_config(project_root: Path) -> Path:
        """Create default .reconstrap.yml in project root"""
        config = ReconstrapConfig()
        config_path = project_root / ConfigManager.DEFAULT_CONFIG_NAME

        ConfigManager.save_config(config, config_path)

        return config_path
