"""
reconstrap - Reconnaissance Toolchain Bootstrapper
Provisions a host with the Go runtime, system packages and recon tools.
"""

__version__ = "1.2.0"
__author__ = "Deadly Reconnaissance Package contributors"
__license__ = "MIT"

__all__ = ["__version__"]
