#!/usr/bin/env python3
"""
reconstrap Shell Profile Setup
Persists PATH/GOPATH exports in shell startup files
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple

from rich.console import Console

from reconstrap.core.results import Stage, StepResult

console = Console()


@dataclass(frozen=True)
class ProfileDirective:
    """Lines to persist unless `marker` already occurs in the profile file"""
    marker: str
    lines: Tuple[str, ...]


@dataclass
class ProfileEdit:
    """Concrete append for one profile file"""
    path: Path
    lines: List[str]


def shell_path(value: str) -> str:
    """'~/go' -> '$HOME/go' so the profile stays portable"""
    if value == '~':
        return '$HOME'
    if value.startswith('~/'):
        return '$HOME/' + value[2:]
    return value


def candidate_profiles(ctx) -> List[Path]:
    """
    Profile files to update

    The first configured profile is always a target (created on append);
    the remaining candidates only when they already exist.
    """
    profiles = [ctx.path(p) for p in ctx.config.profiles]
    return [p for i, p in enumerate(profiles) if i == 0 or p.exists()]


def plan_profile_edits(profiles: Sequence[Path], directives: Sequence[ProfileDirective]) -> List[ProfileEdit]:
    """
    Work out which lines each profile is missing

    Args:
        profiles: Profile files to check
        directives: Marker/lines pairs to persist

    Returns:
        One edit per profile that needs lines appended
    """
    edits = []
    for profile in profiles:
        try:
            # Profiles are not always UTF-8; undecodable bytes must not hide markers
            content = profile.read_text(errors='surrogateescape') if profile.exists() else ''
        except OSError:
            content = ''

        lines: List[str] = []
        for directive in directives:
            if directive.marker not in content:
                lines.extend(directive.lines)
        if lines:
            edits.append(ProfileEdit(path=profile, lines=lines))
    return edits


def _ends_with_newline(path: Path) -> bool:
    """True for an empty file or one whose last byte is a newline"""
    with open(path, 'rb') as f:
        f.seek(0, os.SEEK_END)
        if f.tell() == 0:
            return True
        f.seek(-1, os.SEEK_END)
        return f.read(1) == b'\n'


def apply_profile_edits(edits: Sequence[ProfileEdit]) -> None:
    """Append planned lines, creating missing profile files"""
    for edit in edits:
        edit.path.parent.mkdir(parents=True, exist_ok=True)
        needs_newline = edit.path.exists() and not _ends_with_newline(edit.path)
        with open(edit.path, 'a', encoding='utf-8') as f:
            if needs_newline:
                f.write('\n')
            for line in edit.lines:
                f.write(f'{line}\n')
        console.print(f"[green][+][/green] Updated {edit.path}")


def persist_directives(ctx, directives: Sequence[ProfileDirective]) -> List[ProfileEdit]:
    """Plan and (unless dry-run) apply directives to the candidate profiles"""
    edits = plan_profile_edits(candidate_profiles(ctx), directives)
    if ctx.dry_run:
        for edit in edits:
            console.print(f"[dim]  (dry-run) append {len(edit.lines)} line(s) to {edit.path}[/dim]")
    else:
        apply_profile_edits(edits)
    return edits


class EnvironmentConfigurator:
    """Go environment: runtime bin dir on PATH, GOPATH and $GOPATH/bin"""

    def directives(self, ctx) -> List[ProfileDirective]:
        runtime_bin = str(ctx.config.runtime_bin_dir)
        return [
            ProfileDirective(
                marker=runtime_bin,
                lines=(f'export PATH=$PATH:{runtime_bin}',),
            ),
            ProfileDirective(
                marker='GOPATH',
                lines=(
                    f'export GOPATH={shell_path(ctx.config.gopath)}',
                    'export PATH=$PATH:$GOPATH/bin',
                ),
            ),
        ]

    def plan(self, ctx) -> List[ProfileEdit]:
        return plan_profile_edits(candidate_profiles(ctx), self.directives(ctx))

    def configure(self, ctx) -> StepResult:
        """
        Persist the exports, mirror them into ctx.env and create the
        GOPATH skeleton
        """
        console.print("[blue][*][/blue] Setting up Go environment...")
        edits = persist_directives(ctx, self.directives(ctx))

        gopath = ctx.gopath
        ctx.add_to_path(ctx.config.runtime_bin_dir)
        ctx.env['GOPATH'] = str(gopath)
        ctx.add_to_path(gopath / 'bin')

        if not ctx.dry_run:
            for sub in ('bin', 'src', 'pkg'):
                (gopath / sub).mkdir(parents=True, exist_ok=True)

        if not edits:
            return StepResult.skipped(Stage.ENV_CONFIGURED, "Go environment already configured")
        return StepResult.success(
            Stage.ENV_CONFIGURED,
            "Go environment configured",
            edits=[str(e.path) for e in edits],
        )
