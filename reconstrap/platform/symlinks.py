#!/usr/bin/env python3
"""
reconstrap Symlink Creator
Exposes the cloned tool under a stable alias directory
"""

import stat

from rich.console import Console

from reconstrap.core.results import Stage, StepResult
from reconstrap.platform.profile import ProfileDirective, persist_directives, shell_path

console = Console()


class SymlinkCreator:
    """Links <alias_dir>/<tool name> to the cloned tool's entry script"""

    def directives(self, ctx):
        alias_dir = ctx.config.alias_dir
        return [
            ProfileDirective(
                marker=self._marker(alias_dir),
                lines=(f'export PATH=$PATH:{shell_path(alias_dir)}',),
            ),
        ]

    @staticmethod
    def _marker(alias_dir: str) -> str:
        """'~/.local/bin' -> '.local/bin'; a lone '~/bin' is too common a substring"""
        relative = alias_dir[2:] if alias_dir.startswith('~/') else ''
        if '/' in relative:
            return relative
        return shell_path(alias_dir)

    def create(self, ctx) -> StepResult:
        """
        Ensure the alias directory exists and is on PATH, then link the
        entry script. A missing entry script is skipped, not a failure.
        """
        console.print("[blue][*][/blue] Creating symbolic links...")
        alias_dir = ctx.alias_dir
        entry = ctx.cloned_tool_entry
        link = alias_dir / ctx.config.cloned_tool_name

        if not ctx.dry_run:
            alias_dir.mkdir(parents=True, exist_ok=True)
        persist_directives(ctx, self.directives(ctx))
        ctx.add_to_path(alias_dir)

        if not entry.is_file():
            return StepResult.skipped(
                Stage.LINKS_CREATED,
                f"{entry} not found, no link created",
            )

        if ctx.dry_run:
            console.print(f"[dim]  (dry-run) ln -sf {entry} {link}[/dim]")
            return StepResult.success(Stage.LINKS_CREATED, f"{link} -> {entry}", link=str(link))

        if link.is_symlink() or link.exists():
            link.unlink()
        link.symlink_to(entry)
        mode = entry.stat().st_mode
        entry.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

        return StepResult.success(Stage.LINKS_CREATED, f"{link} -> {entry}", link=str(link))
