"""
reconstrap Platform-Specific Installers
System packages for Linux and macOS, Go tools and cloned tools
"""

from reconstrap.platform.detector import PlatformKind
from reconstrap.platform.installers.base import BaseInstaller, NullInstaller, PackageMapper
from reconstrap.platform.installers.linux import AptInstaller, YumInstaller
from reconstrap.platform.installers.macos import HomebrewInstaller
from reconstrap.platform.installers.go_tools import GoToolInstaller
from reconstrap.platform.installers.git_clone import ClonedToolInstaller


def installer_for(kind: PlatformKind) -> BaseInstaller:
    """Pick the system package installer for a platform family"""
    installer_map = {
        PlatformKind.DEBIAN: AptInstaller,
        PlatformKind.REDHAT: YumInstaller,
        PlatformKind.MACOS: HomebrewInstaller,
    }
    return installer_map.get(kind, NullInstaller)()


__all__ = [
    'BaseInstaller',
    'NullInstaller',
    'PackageMapper',
    'AptInstaller',
    'YumInstaller',
    'HomebrewInstaller',
    'GoToolInstaller',
    'ClonedToolInstaller',
    'installer_for',
]
