#!/usr/bin/env python3
"""
reconstrap macOS Installer
System package installer for macOS using Homebrew
"""

from pathlib import Path
from typing import List

from rich.console import Console

from reconstrap.core.results import Stage, StepResult
from reconstrap.errors import PackageManagerFailure
from reconstrap.platform.installers.base import BaseInstaller

console = Console()


class HomebrewInstaller(BaseInstaller):
    """macOS package installer using Homebrew"""

    package_manager = 'brew'

    BOOTSTRAP_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
    BREW_PREFIXES = ('/opt/homebrew/bin', '/usr/local/bin')

    def get_bootstrap_command(self) -> List[str]:
        return ['/bin/bash', '-c', f'/bin/bash -c "$(curl -fsSL {self.BOOTSTRAP_URL})"']

    def ensure_homebrew(self, ctx) -> bool:
        """
        Install Homebrew if it is not on PATH

        Returns:
            True if the bootstrap script ran
        """
        if ctx.runner.which('brew'):
            return False

        console.print("[blue][*][/blue] Installing Homebrew...")
        ctx.runner.run(self.get_bootstrap_command(), error=PackageManagerFailure)

        # The installer does not touch the current PATH
        for prefix in self.BREW_PREFIXES:
            if (Path(prefix) / 'brew').exists():
                ctx.add_to_path(prefix)
        return True

    def get_install_command(self, ctx) -> List[str]:
        cmd = ['brew', 'install']
        if ctx.config.installation_quiet_mode:
            cmd.append('--quiet')
        return cmd + self.packages(ctx)

    def install(self, ctx) -> StepResult:
        """Install packages using brew (no sudo needed)"""
        bootstrapped = self.ensure_homebrew(ctx)
        ctx.runner.run(self.get_install_command(ctx), error=PackageManagerFailure)
        return StepResult.success(
            Stage.DEPS_INSTALLED,
            "System dependencies installed",
            packages=self.packages(ctx),
            bootstrapped=bootstrapped,
        )
