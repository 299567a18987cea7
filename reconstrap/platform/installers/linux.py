#!/usr/bin/env python3
"""
reconstrap Linux Installers
System package installers for Debian and RedHat families
"""

from typing import List

from reconstrap.core.results import Stage, StepResult
from reconstrap.errors import PackageManagerFailure
from reconstrap.platform.installers.base import BaseInstaller


class AptInstaller(BaseInstaller):
    """Debian/Ubuntu package installer using apt"""

    package_manager = 'apt'

    def get_install_command(self, ctx) -> List[str]:
        cmd = ['apt-get', 'install', '-y']
        if ctx.config.installation_quiet_mode:
            cmd.append('--quiet')
        return cmd + self.packages(ctx)

    def install(self, ctx) -> StepResult:
        """Refresh the package index, then install everything in one transaction"""
        runner = ctx.runner
        runner.run(runner.privileged(['apt-get', 'update']), error=PackageManagerFailure)
        runner.run(runner.privileged(self.get_install_command(ctx)), error=PackageManagerFailure)
        return StepResult.success(
            Stage.DEPS_INSTALLED,
            "System dependencies installed",
            packages=self.packages(ctx),
        )


class YumInstaller(BaseInstaller):
    """RHEL/CentOS/Fedora package installer using yum"""

    package_manager = 'yum'

    def get_install_command(self, ctx) -> List[str]:
        cmd = ['yum', 'install', '-y']
        if ctx.config.installation_quiet_mode:
            cmd.append('-q')
        return cmd + self.packages(ctx)

    def install(self, ctx) -> StepResult:
        runner = ctx.runner
        runner.run(runner.privileged(self.get_install_command(ctx)), error=PackageManagerFailure)
        return StepResult.success(
            Stage.DEPS_INSTALLED,
            "System dependencies installed",
            packages=self.packages(ctx),
        )
