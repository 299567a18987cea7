#!/usr/bin/env python3
"""
reconstrap Cloned Tool Installer
Installs a tool from its git repository and bundled setup script
"""

from typing import List

from rich.console import Console

from reconstrap.core.results import Stage, StepResult
from reconstrap.errors import RepositoryCloneFailure, ToolFetchFailure

console = Console()


class ClonedToolInstaller:
    """
    Clone (or update) the repository into the home directory, then run its
    setup: `sudo ./setup.sh` on Linux, pip requirements on macOS.
    """

    def get_sync_command(self, ctx) -> List[str]:
        target = ctx.cloned_tool_dir
        if target.is_dir():
            return ['git', '-C', str(target), 'pull']
        return ['git', 'clone', ctx.config.cloned_tool_repository, str(target)]

    def get_setup_command(self, ctx) -> List[str]:
        if ctx.platform.is_linux:
            return ctx.runner.privileged(['./setup.sh'])
        return ['pip3', 'install', '-r', 'requirements.txt']

    def install(self, ctx) -> StepResult:
        """
        Raises:
            RepositoryCloneFailure: git clone/pull failed
            ToolFetchFailure: the setup script failed
        """
        name = ctx.config.cloned_tool_name
        updating = ctx.cloned_tool_dir.is_dir()
        if updating:
            console.print(f"[yellow][!][/yellow] {ctx.cloned_tool_dir} already exists, updating...")

        ctx.runner.run(self.get_sync_command(ctx), error=RepositoryCloneFailure)

        setup = self.get_setup_command(ctx)
        result = ctx.runner.run(setup, cwd=ctx.cloned_tool_setup_dir, check=False)
        if result.returncode != 0:
            raise ToolFetchFailure(name, setup, result.returncode)

        return StepResult.success(
            Stage.CLONED_TOOL_INSTALLED,
            f"{name} installed",
            updated=updating,
        )
