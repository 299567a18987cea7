#!/usr/bin/env python3
"""
reconstrap Install Context
Explicit state handed to every provisioning step
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from reconstrap.config import ReconstrapConfig
from reconstrap.platform.detector import PlatformInfo
from reconstrap.platform.runner import CommandRunner, append_path


@dataclass
class InstallContext:
    """
    Configuration and environment for one provisioning run

    `env` starts as a copy of the process environment and collects the
    PATH/GOPATH exports made during the run. Child processes receive it;
    os.environ is never modified.
    """
    platform: PlatformInfo
    config: ReconstrapConfig
    home: Path
    env: Dict[str, str]
    runner: CommandRunner
    dry_run: bool = False
    use_latest: bool = False

    @classmethod
    def create(cls, platform: PlatformInfo, config: ReconstrapConfig,
               home: Optional[Path] = None, env: Optional[Dict[str, str]] = None,
               runner: Optional[CommandRunner] = None, dry_run: bool = False,
               use_latest: bool = False) -> 'InstallContext':
        home = Path(home) if home is not None else Path.home()
        env = dict(os.environ if env is None else env)
        env.setdefault('HOME', str(home))
        if runner is None:
            runner = CommandRunner(
                env=env,
                dry_run=dry_run,
                retries=config.installation_retry_on_failure,
                use_sudo=config.installation_use_sudo,
                is_root=platform.is_root,
                quiet=config.installation_quiet_mode,
            )
        else:
            runner.env = env
        return cls(platform=platform, config=config, home=home, env=env,
                   runner=runner, dry_run=dry_run, use_latest=use_latest)

    def path(self, value: str) -> Path:
        """Expand a configured path against this run's home directory"""
        return self.config.expand(value, self.home)

    @property
    def gopath(self) -> Path:
        return self.path(self.config.gopath)

    @property
    def alias_dir(self) -> Path:
        return self.path(self.config.alias_dir)

    @property
    def cloned_tool_dir(self) -> Path:
        return self.path(self.config.cloned_tool_directory)

    @property
    def cloned_tool_entry(self) -> Path:
        return self.cloned_tool_dir / self.config.cloned_tool_entry

    @property
    def cloned_tool_setup_dir(self) -> Path:
        return self.cloned_tool_dir / self.config.cloned_tool_setup_dir

    def add_to_path(self, directory, prepend: bool = False) -> bool:
        return append_path(self.env, directory, prepend=prepend)
