#!/usr/bin/env python3
"""
reconstrap Base Installer Class
Base class for platform-specific system package installers
"""

from abc import ABC, abstractmethod
from typing import Dict, List

from reconstrap.core.results import Stage, StepResult


class BaseInstaller(ABC):
    """
    Abstract base class for platform-specific installers
    """

    package_manager = ''

    def packages(self, ctx) -> List[str]:
        """
        Packages to install: the built-in list plus configured extras

        Args:
            ctx: InstallContext for the run

        Returns:
            Package names for this installer's package manager
        """
        names = list(PackageMapper.get_packages(self.package_manager))
        for extra in ctx.config.extra_packages.get(self.package_manager, []):
            if extra not in names:
                names.append(extra)
        return names

    @abstractmethod
    def install(self, ctx) -> StepResult:
        """
        Install the system packages

        Args:
            ctx: InstallContext for the run

        Returns:
            StepResult for the DEPS_INSTALLED stage

        Raises:
            PackageManagerFailure: the package manager exited non-zero
        """

    def get_install_command(self, ctx) -> List[str]:
        """Command that installs every package (without privilege prefix)"""
        return []


class NullInstaller(BaseInstaller):
    """Generic Linux: no known package manager, nothing is installed"""

    def install(self, ctx) -> StepResult:
        return StepResult.skipped(
            Stage.DEPS_INSTALLED,
            "No supported package manager for generic Linux; install dependencies manually",
            warn=True,
        )


class PackageMapper:
    """
    Maps package managers to the OS packages the recon toolchain needs
    """

    # compiler toolchain, TLS/FFI headers, python, network utilities, nmap
    SYSTEM_PACKAGES: Dict[str, List[str]] = {
        'apt': [
            'git',
            'nmap',
            'python3',
            'python3-pip',
            'wget',
            'curl',
            'build-essential',
            'libssl-dev',
            'libffi-dev',
            'python3-dev',
        ],
        'yum': [
            'git',
            'nmap',
            'python3',
            'python3-pip',
            'wget',
            'curl',
            'gcc',
            'openssl-devel',
            'libffi-devel',
            'python3-devel',
        ],
        # Homebrew also provides the Go runtime
        'brew': [
            'git',
            'go',
            'nmap',
            'python3',
            'wget',
        ],
    }

    @classmethod
    def get_packages(cls, package_manager: str) -> List[str]:
        """
        Get the package list for a package manager

        Args:
            package_manager: e.g. 'apt', 'yum', 'brew'

        Returns:
            Package names, empty when the manager is unknown
        """
        return cls.SYSTEM_PACKAGES.get(package_manager, [])
