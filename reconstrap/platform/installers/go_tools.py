#!/usr/bin/env python3
"""
reconstrap Go Tool Installer
Builds pinned recon tools with `go install`
"""

from typing import List, Optional, Sequence

from rich.console import Console

from reconstrap.core.results import Stage, StepResult
from reconstrap.errors import ToolFetchFailure
from reconstrap.platform.version_manager import ToolSpec, VersionManager

console = Console()


class GoToolInstaller:
    """Installs each ToolSpec into $GOPATH/bin via `go install`"""

    def __init__(self, specs: Optional[Sequence[ToolSpec]] = None):
        if specs is None:
            specs = VersionManager().get_tool_specs('go')
        self.specs: List[ToolSpec] = list(specs)

    def get_install_command(self, spec: ToolSpec, use_latest: bool = False) -> List[str]:
        return ['go', 'install', spec.package_spec(use_latest)]

    def install(self, ctx, spec: ToolSpec) -> None:
        """
        Install one tool

        Raises:
            ToolFetchFailure: go install exited non-zero
        """
        cmd = self.get_install_command(spec, ctx.use_latest)
        result = ctx.runner.run(cmd, check=False)
        if result.returncode != 0:
            raise ToolFetchFailure(spec.name, cmd, result.returncode)

    def install_all(self, ctx) -> StepResult:
        """
        Install every tool in table order

        Fail-fast unless installation.continue_on_tool_failure is set, in
        which case failures are collected and reported in the result.
        """
        installed = []
        failed = []

        for spec in self.specs:
            version = 'latest' if ctx.use_latest or not spec.version else spec.version
            console.print(f"[blue][*][/blue] Installing {spec.name} ({version})...")
            try:
                self.install(ctx, spec)
            except ToolFetchFailure as e:
                if not ctx.config.installation_continue_on_tool_failure:
                    raise
                console.print(f"[red][-][/red] {e.message}")
                failed.append(spec.name)
                continue
            installed.append(spec.name)

        if failed:
            return StepResult.failed(
                Stage.TOOLS_INSTALLED,
                f"Failed to install: {', '.join(failed)}",
                installed=installed,
                failed=failed,
            )
        return StepResult.success(
            Stage.TOOLS_INSTALLED,
            "Go tools installed",
            installed=installed,
            failed=failed,
        )
