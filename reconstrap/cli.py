#!/usr/bin/env python3
"""
reconstrap CLI - Command-line interface
Click-based entry point for provisioning a recon workstation
"""

import sys
import click
from pathlib import Path
from typing import Optional

from reconstrap import __version__
from reconstrap.config import ConfigManager, ReconstrapConfig
from reconstrap.core import reporter
from reconstrap.core.reporter import console
from reconstrap.errors import ReconstrapError

CONFIRM_ACCEPTED = ('y', 'Y')


def _load_config(config_path: Optional[str]) -> ReconstrapConfig:
    return ConfigManager.load_config(Path(config_path) if config_path else None)


def _detect_or_exit():
    """Detect the platform; unsupported hosts exit 1 before any prompt"""
    from reconstrap.platform import detect_platform

    try:
        info = detect_platform()
    except ReconstrapError as e:
        reporter.print_error(e.message)
        sys.exit(e.exit_code)

    reporter.print_status(f"Detected: {info.label}")
    return info


def _ask_confirmation() -> bool:
    """
    Single y/n prompt. Only 'y'/'Y' proceeds; anything else, including
    EOF on stdin, cancels.
    """
    reporter.print_warning("This script will install security reconnaissance tools")
    reporter.print_warning("Some commands require sudo privileges")
    try:
        answer = click.prompt("Continue? (y/n)", default='', show_default=False, type=str)
    except click.Abort:
        return False
    return answer.strip() in CONFIRM_ACCEPTED


def _run_install(yes: bool = False, dry_run: bool = False, use_latest: bool = False,
                 config_path: Optional[str] = None):
    from reconstrap.core.context import InstallContext
    from reconstrap.core.orchestrator import Orchestrator

    reporter.print_banner()
    info = _detect_or_exit()
    config = _load_config(config_path)
    ctx = InstallContext.create(info, config, dry_run=dry_run, use_latest=use_latest)
    console.print("")

    confirm = (lambda: True) if yes else _ask_confirmation

    try:
        outcome = Orchestrator(ctx).run(confirm)
    except ReconstrapError as e:
        stage = f" during {e.stage.value}" if e.stage else ""
        reporter.print_error(f"{e.message}{stage}")
        sys.exit(e.exit_code)
    except OSError as e:
        reporter.print_error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        reporter.print_error("Interrupted")
        sys.exit(130)

    if outcome.cancelled:
        reporter.print_error("Installation cancelled")
        sys.exit(0)

    console.print("")
    reporter.print_completion()


@click.group(invoke_without_command=True)
@click.option('--version', is_flag=True, help='Show version and exit')
@click.pass_context
def main(ctx, version):
    """
    reconstrap - Reconnaissance Toolchain Bootstrapper

    Installs Go, system packages and the recon toolchain (subfinder,
    assetfinder, amass, nuclei, httpx, EyeWitness), then verifies them.

    Examples:
        reconstrap               # Interactive install (same as 'install')
        reconstrap install -y    # Install without the confirmation prompt
        reconstrap verify        # Only check which tools are present
    """
    if version:
        click.echo(f"reconstrap v{__version__}")
        ctx.exit(0)

    if ctx.invoked_subcommand is None:
        _run_install()


@main.command()
@click.option('--yes', '-y', is_flag=True, help='Skip the confirmation prompt')
@click.option('--dry-run', is_flag=True, help='Print commands and profile edits without running them')
@click.option('--use-latest', is_flag=True, help='Install latest tool versions (bypass version pinning)')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help='Path to .reconstrap.yml (default: search from current dir)')
def install(yes, dry_run, use_latest, config_path):
    """Install and verify the reconnaissance toolchain."""
    _run_install(yes=yes, dry_run=dry_run, use_latest=use_latest, config_path=config_path)


@main.command()
@click.option('--strict', is_flag=True, help='Exit 1 when any tool is missing')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help='Path to .reconstrap.yml')
def verify(strict, config_path):
    """Check which recon tools resolve on PATH."""
    from reconstrap.core.context import InstallContext
    from reconstrap.platform.verifier import Verifier

    info = _detect_or_exit()
    config = _load_config(config_path)
    ctx = InstallContext.create(info, config)

    # Same view a freshly sourced profile would give
    ctx.add_to_path(config.runtime_bin_dir)
    ctx.add_to_path(ctx.gopath / 'bin')
    ctx.add_to_path(ctx.alias_dir)

    report = Verifier.from_context(ctx).verify(ctx)
    reporter.print_verification(report)

    if strict and not report.ok:
        sys.exit(1)


@main.command()
def detect():
    """Show the detected platform."""
    from rich.table import Table
    from reconstrap.platform.detector import go_architecture

    info = _detect_or_exit()

    table = Table(title="Platform Information", show_header=False)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in info.to_dict().items():
        table.add_row(key, str(value))
    try:
        table.add_row('go_architecture', go_architecture(info.architecture))
    except ReconstrapError as e:
        table.add_row('go_architecture', f"[red]{e.message}[/red]")
    console.print(table)


@main.command()
def versions():
    """
    Show pinned tool versions from tool-versions.lock.

    These are the versions `reconstrap install` builds unless --use-latest
    is given.
    """
    from rich.table import Table
    from reconstrap.platform.version_manager import VersionManager

    vm = VersionManager()

    if not vm.is_locked():
        console.print("[yellow]⚠ No tool-versions.lock found[/yellow]")
        return

    meta = vm.get_metadata()
    console.print(f"\n[bold cyan]reconstrap Tool Versions[/bold cyan]")
    console.print(f"[dim]Lock file version: {meta.get('lockfile_version')}[/dim]")
    console.print(f"[dim]Go runtime: {vm.get_runtime_version('go')}[/dim]\n")

    table = Table(title="Pinned Tool Versions", show_header=True, header_style="bold cyan")
    table.add_column("Tool", style="magenta")
    table.add_column("Source", style="cyan")
    table.add_column("Version", style="green")

    specs = vm.get_tool_specs('go')
    for spec in specs:
        table.add_row(spec.name, spec.source, spec.version or 'latest')

    console.print(table)
    console.print(f"\n[bold]Total: {len(specs)} tools[/bold]")
    console.print(f"[dim]Use --use-latest with 'reconstrap install' to bypass pinning[/dim]\n")


@main.command()
@click.option('--init', 'init_config', is_flag=True, help='Write a default .reconstrap.yml here')
@click.option('--force', is_flag=True, help='Overwrite an existing .reconstrap.yml')
def config(init_config, force):
    """Show the effective configuration, or create a default one."""
    import yaml

    if init_config:
        target = Path.cwd() / ConfigManager.DEFAULT_CONFIG_NAME
        if target.exists() and not force:
            reporter.print_error(f"{target} already exists (use --force to overwrite)")
            sys.exit(1)
        ConfigManager.create_default_config(Path.cwd())
        reporter.print_success(f"Created {target}")
        return

    found = ConfigManager.find_config()
    source = str(found) if found else "built-in defaults"
    console.print(f"[bold cyan]Configuration[/bold cyan] [dim]({source})[/dim]\n")
    cfg = ConfigManager.load_config(found)
    click.echo(yaml.dump(cfg.to_dict(), default_flow_style=False, sort_keys=False, indent=2))


if __name__ == '__main__':
    main()
