#!/usr/bin/env python3
"""
reconstrap Command Runner
Runs child processes against the install context's environment
"""

import shutil
import subprocess
import time
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Type, Union

from rich.console import Console

from reconstrap.errors import CommandFailed

console = Console()


class CommandRunner:
    """
    Thin wrapper around subprocess.run

    Output is streamed to the terminal unless capture is requested, so the
    failing command's own diagnostics are what the user sees.
    """

    def __init__(self, env: Optional[Dict[str, str]] = None, dry_run: bool = False,
                 retries: int = 1, use_sudo: bool = True, is_root: bool = False,
                 quiet: bool = False):
        self.env = env
        self.dry_run = dry_run
        self.retries = max(1, int(retries))
        self.use_sudo = use_sudo
        self.is_root = is_root
        self.quiet = quiet
        # Every command handed to run(), in order
        self.history: List[List[str]] = []

    def privileged(self, cmd: Sequence[str]) -> List[str]:
        """Prefix sudo unless already root or sudo is disabled"""
        if self.use_sudo and not self.is_root:
            return ['sudo'] + list(cmd)
        return list(cmd)

    def which(self, name: str) -> Optional[str]:
        """Resolve an executable on the context PATH"""
        path = self.env.get('PATH') if self.env is not None else None
        return shutil.which(name, path=path)

    def run(self, cmd: Sequence[str], cwd: Optional[Union[str, Path]] = None,
            capture: bool = False, check: bool = True,
            error: Type[CommandFailed] = CommandFailed) -> subprocess.CompletedProcess:
        """
        Run a command and return result

        Args:
            cmd: Command and arguments
            cwd: Working directory
            capture: Capture stdout/stderr instead of streaming them
            check: Raise `error` on a non-zero exit status
            error: CommandFailed subclass raised on failure

        Returns:
            CompletedProcess result (a synthetic success in dry-run mode)
        """
        cmd = [str(part) for part in cmd]
        self.history.append(cmd)

        if self.dry_run:
            console.print(f"[dim]  (dry-run) {' '.join(cmd)}[/dim]")
            return subprocess.CompletedProcess(cmd, 0, '', '')

        if not capture and not self.quiet:
            console.print(f"[dim]  $ {' '.join(cmd)}[/dim]")

        result = None
        for attempt in range(self.retries):
            try:
                result = subprocess.run(
                    cmd,
                    cwd=str(cwd) if cwd is not None else None,
                    env=self.env,
                    capture_output=capture or self.quiet,
                    text=True,
                    check=False,
                )
            except FileNotFoundError:
                # Same status a shell reports for an unknown command
                result = subprocess.CompletedProcess(cmd, 127, '', f"{cmd[0]}: command not found")
            if result.returncode == 0:
                return result
            if attempt < self.retries - 1:
                time.sleep(1)

        if (capture or self.quiet) and result.stderr:
            # Output was not streamed, so show what the command said
            for line in result.stderr.strip().splitlines()[-5:]:
                console.print(f"  {line}", style="dim", markup=False)

        if check:
            raise error(cmd, result.returncode)
        return result

    def probe(self, cmd: Sequence[str]) -> Optional[str]:
        """Run a read-only command and return its stdout, or None on failure"""
        try:
            result = subprocess.run(
                [str(part) for part in cmd],
                env=self.env,
                capture_output=True,
                text=True,
                timeout=30,
                check=False,
            )
        except (subprocess.SubprocessError, OSError):
            return None
        if result.returncode != 0:
            return None
        return result.stdout


def path_entries(env: Mapping[str, str]) -> List[str]:
    """Split the PATH of an environment mapping"""
    value = env.get('PATH', '')
    return [entry for entry in value.split(':') if entry]


def append_path(env: Dict[str, str], directory: Union[str, Path], prepend: bool = False) -> bool:
    """
    Add a directory to env['PATH'] if not already present

    With prepend, the directory is moved to the front even when present,
    so its executables shadow same-named ones elsewhere on PATH.
    """
    directory = str(directory)
    entries = path_entries(env)
    if prepend:
        if entries[:1] == [directory]:
            return False
        env['PATH'] = ':'.join([directory] + [e for e in entries if e != directory])
        return True
    if directory in entries:
        return False
    entries.append(directory)
    env['PATH'] = ':'.join(entries)
    return True
