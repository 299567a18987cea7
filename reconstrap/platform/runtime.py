#!/usr/bin/env python3
"""
reconstrap Go Runtime Installer
Ensures a Go toolchain at or above the minimum version
"""

import re
import tempfile
from pathlib import Path
from typing import List, Optional, Tuple

from rich.console import Console

from reconstrap.core.results import Stage, StepResult
from reconstrap.errors import DownloadFailure, RuntimeInstallFailure
from reconstrap.platform.detector import PlatformKind, go_architecture
from reconstrap.platform.version_manager import VersionManager

console = Console()

# "go version go1.23.5 linux/amd64", "go version go1.21 darwin/arm64"
GO_VERSION_RE = re.compile(r'\bgo(\d+)\.(\d+)(?:\.(\d+))?')


def parse_go_version(output: str) -> Optional[Tuple[int, int]]:
    """
    Extract (major, minor) from `go version` output

    Returns:
        The version pair, or None for unparseable output (e.g. devel builds)
    """
    if not output:
        return None
    match = GO_VERSION_RE.search(output)
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


class GoRuntimeInstaller:
    """Installs the pinned Go release into <install_root>/go"""

    def __init__(self, version_manager: Optional[VersionManager] = None):
        self.version_manager = version_manager or VersionManager()

    def target_version(self, ctx) -> str:
        return ctx.config.runtime_version or self.version_manager.get_runtime_version('go')

    def find_go(self, ctx) -> Optional[str]:
        """
        The runtime under install_root, else `go` on the context PATH

        The managed runtime is moved to the front of PATH so an older
        distribution `go` cannot shadow it for later steps.
        """
        candidate = ctx.config.runtime_bin_dir / 'go'
        if candidate.is_file():
            ctx.add_to_path(ctx.config.runtime_bin_dir, prepend=True)
            return str(candidate)
        return ctx.runner.which('go')

    def installed_version(self, ctx) -> Optional[Tuple[int, int]]:
        """Version of the installed `go` binary, or None"""
        go = self.find_go(ctx)
        if not go:
            return None
        return parse_go_version(ctx.runner.probe([go, 'version']))

    def download_url(self, ctx) -> str:
        os_name = 'darwin' if ctx.platform.kind == PlatformKind.MACOS else 'linux'
        return ctx.config.runtime_download_url.format(
            version=self.target_version(ctx),
            os=os_name,
            arch=go_architecture(ctx.platform.architecture),
        )

    def get_download_command(self, ctx, url: str, archive: Path) -> List[str]:
        """wget when available, curl otherwise"""
        if ctx.runner.which('wget') or not ctx.runner.which('curl'):
            return ['wget', '-q', '-O', str(archive), url]
        return ['curl', '-fsSL', '-o', str(archive), url]

    def ensure(self, ctx) -> StepResult:
        """
        Install Go unless a sufficient version is already present

        Raises:
            UnsupportedArchitecture: no release for this CPU
            DownloadFailure: the archive could not be fetched
            RuntimeInstallFailure: removal or extraction failed
        """
        console.print("[blue][*][/blue] Checking Go version...")
        installed = self.installed_version(ctx)
        minimum = tuple(ctx.config.runtime_min_version)

        if installed is not None and installed >= minimum:
            return StepResult.skipped(
                Stage.RUNTIME_READY,
                f"Go version {installed[0]}.{installed[1]} is sufficient",
                installed=installed,
            )

        if installed is not None:
            console.print(
                f"[yellow][!][/yellow] Go version {installed[0]}.{installed[1]} is too old, "
                "installing newer version..."
            )

        # Resolve the architecture before touching the network
        url = self.download_url(ctx)
        version = self.target_version(ctx)
        install_root = Path(ctx.config.runtime_install_root)
        archive_name = url.rsplit('/', 1)[-1]

        console.print(f"[blue][*][/blue] Installing Go {version}...")
        if ctx.dry_run:
            self._replace_runtime(ctx, url, install_root, Path(tempfile.gettempdir()) / archive_name)
        else:
            with tempfile.TemporaryDirectory(prefix='reconstrap-') as tmp:
                self._replace_runtime(ctx, url, install_root, Path(tmp) / archive_name)

        ctx.add_to_path(ctx.config.runtime_bin_dir, prepend=True)
        return StepResult.success(
            Stage.RUNTIME_READY,
            f"Go {version} installed",
            url=url,
            previous=installed,
        )

    def _replace_runtime(self, ctx, url: str, install_root: Path, archive: Path) -> None:
        """Download, remove the old tree, extract"""
        runner = ctx.runner
        runner.run(self.get_download_command(ctx, url, archive), error=DownloadFailure)
        runner.run(runner.privileged(['rm', '-rf', str(install_root / 'go')]),
                   error=RuntimeInstallFailure)
        runner.run(runner.privileged(['tar', '-C', str(install_root), '-xzf', str(archive)]),
                   error=RuntimeInstallFailure)
