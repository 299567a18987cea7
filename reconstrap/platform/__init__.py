"""
reconstrap Platform Detection & Installation
Host classification and provisioning steps
"""

from reconstrap.platform.detector import (
    PlatformDetector,
    PlatformInfo,
    PlatformKind,
    classify_platform,
    go_architecture,
    detect_platform,
)

__all__ = [
    'PlatformDetector',
    'PlatformInfo',
    'PlatformKind',
    'classify_platform',
    'go_architecture',
    'detect_platform',
]
