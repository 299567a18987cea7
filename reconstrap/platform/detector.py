#!/usr/bin/env python3
"""
reconstrap Platform Detection
Classifies the host OS family and CPU architecture
"""

import os
import platform
import sys
from pathlib import Path
from typing import Optional, Dict, Union
from enum import Enum
from dataclasses import dataclass

from reconstrap.errors import UnsupportedPlatform, UnsupportedArchitecture


class PlatformKind(Enum):
    """Host platform families with distinct package-manager commands"""
    DEBIAN = "debian"        # Debian/Ubuntu (apt)
    REDHAT = "redhat"        # RHEL/CentOS/Fedora (yum)
    LINUX = "linux"          # Any other Linux distribution
    MACOS = "macos"          # macOS (Homebrew)


# Marker files that distinguish Linux families, checked in order
LINUX_MARKERS = (
    ('etc/debian_version', PlatformKind.DEBIAN),
    ('etc/redhat-release', PlatformKind.REDHAT),
)

# uname -m -> Go release architecture
GO_ARCHITECTURES = {
    'x86_64': 'amd64',
    'amd64': 'amd64',
    'aarch64': 'arm64',
    'arm64': 'arm64',
}

PLATFORM_LABELS = {
    PlatformKind.DEBIAN: "Debian/Ubuntu Linux",
    PlatformKind.REDHAT: "RedHat/CentOS/Fedora Linux",
    PlatformKind.LINUX: "Generic Linux",
    PlatformKind.MACOS: "macOS",
}


def classify_platform(identifier: str, root: Union[str, Path] = '/') -> PlatformKind:
    """
    Classify a platform identifier ($OSTYPE or sys.platform style)

    Args:
        identifier: e.g. 'linux-gnu', 'linux', 'darwin23'
        root: Filesystem root used to look up the Linux marker files

    Returns:
        PlatformKind for the host

    Raises:
        UnsupportedPlatform: identifier is not a Linux or Darwin family
    """
    ident = (identifier or '').strip().lower()

    if ident.startswith('linux'):
        root = Path(root)
        for marker, kind in LINUX_MARKERS:
            if (root / marker).is_file():
                return kind
        return PlatformKind.LINUX

    if ident.startswith('darwin'):
        return PlatformKind.MACOS

    raise UnsupportedPlatform(identifier)


def go_architecture(machine: str) -> str:
    """Map `uname -m` output to a Go release architecture"""
    arch = GO_ARCHITECTURES.get((machine or '').strip().lower())
    if arch is None:
        raise UnsupportedArchitecture(machine)
    return arch


@dataclass
class PlatformInfo:
    """Complete platform information"""
    kind: PlatformKind
    identifier: str
    architecture: str
    shell: str
    is_root: bool

    @property
    def label(self) -> str:
        return PLATFORM_LABELS[self.kind]

    @property
    def is_linux(self) -> bool:
        return self.kind != PlatformKind.MACOS

    def to_dict(self) -> Dict:
        """Convert to dictionary for display"""
        return {
            'kind': self.kind.value,
            'identifier': self.identifier,
            'architecture': self.architecture,
            'shell': self.shell,
            'is_root': self.is_root,
        }


class PlatformDetector:
    """
    Detect platform details: OS family, architecture, shell
    """

    def __init__(self, root: Union[str, Path] = '/'):
        self.root = Path(root)
        self.info: Optional[PlatformInfo] = None

    def detect(self) -> PlatformInfo:
        """
        Perform full platform detection

        Returns:
            PlatformInfo with all detected details

        Raises:
            UnsupportedPlatform: host OS is neither Linux nor macOS
        """
        identifier = self._platform_identifier()

        self.info = PlatformInfo(
            kind=classify_platform(identifier, self.root),
            identifier=identifier,
            architecture=platform.machine(),
            shell=self._detect_shell(),
            is_root=self._is_root(),
        )

        return self.info

    def _platform_identifier(self) -> str:
        """Prefer $OSTYPE when the shell exported it, else sys.platform"""
        return os.environ.get('OSTYPE') or sys.platform

    def _detect_shell(self) -> str:
        shell = os.environ.get('SHELL', '')
        if shell:
            return Path(shell).name
        return 'unknown'

    def _is_root(self) -> bool:
        geteuid = getattr(os, 'geteuid', None)
        return geteuid is not None and geteuid() == 0


def detect_platform() -> PlatformInfo:
    """Detect the host platform"""
    return PlatformDetector().detect()
