#!/usr/bin/env python3
"""
reconstrap Console Reporter
Status lines, banner and the verification summary
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from reconstrap import __version__
from reconstrap.core.results import StepResult, StepStatus, VerificationReport

console = Console()


def print_status(message: str):
    console.print(f"[blue][*][/blue] {message}")


def print_success(message: str):
    console.print(f"[green][+][/green] {message}")


def print_error(message: str):
    console.print(f"[red][-][/red] {message}")


def print_warning(message: str):
    console.print(f"[yellow][!][/yellow] {message}")


def print_banner():
    console.print(Panel.fit(
        f"[bold]Deadly Reconnaissance Package Installer[/bold]\nreconstrap v{__version__}",
        border_style="blue",
    ))


def print_step_result(result: StepResult):
    """One line per finished step"""
    if result.status == StepStatus.SUCCESS:
        print_success(result.detail)
    elif result.status == StepStatus.SKIPPED:
        if result.payload.get('warn'):
            print_warning(result.detail)
        else:
            print_success(result.detail)
    else:
        print_error(result.detail)


def print_verification(report: VerificationReport):
    """Per-tool table followed by the overall verdict"""
    table = Table(title="Tool Verification", show_header=True, header_style="bold cyan")
    table.add_column("Tool", style="magenta")
    table.add_column("Status")
    table.add_column("Path", style="dim")

    for result in report.results:
        status = "[green]found[/green]" if result.found else "[red]NOT FOUND[/red]"
        table.add_row(result.name, status, result.path)

    console.print(table)

    if report.ok:
        print_success("All tools installed successfully!")
        print_status("You may need to restart your terminal or run:")
        console.print("  source ~/.bashrc")
    else:
        print_warning(f"Some tools failed to install: {' '.join(report.missing)}")
        print_status("Try running this script again or install them manually")


def print_completion():
    console.print(Panel.fit("[bold green]Installation Complete![/bold green]", border_style="green"))
    print_status("Next steps:")
    console.print("  1. Restart your terminal or run: source ~/.bashrc")
    console.print("  2. Run the recon script: ./recon_script.sh example.com")
