#!/usr/bin/env python3
"""
reconstrap Error Types
Every provisioning failure derives from ReconstrapError
"""

from typing import List, Optional, Sequence


class ReconstrapError(Exception):
    """Base class for all provisioning failures"""

    exit_code = 1

    def __init__(self, message: str, exit_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code
        # Filled in by the orchestrator when the error escapes a step
        self.stage = None


class UnsupportedPlatform(ReconstrapError):
    """Host platform identifier matches none of the known families"""

    def __init__(self, identifier: str):
        super().__init__(f"Unsupported OS: {identifier}")
        self.identifier = identifier


class UnsupportedArchitecture(ReconstrapError):
    """CPU architecture has no matching runtime release"""

    def __init__(self, machine: str):
        super().__init__(f"Unsupported architecture: {machine}")
        self.machine = machine


class CommandFailed(ReconstrapError):
    """A child process exited non-zero (or could not be started)"""

    def __init__(self, cmd: Sequence[str], returncode: int, message: Optional[str] = None):
        self.cmd: List[str] = list(cmd)
        self.returncode = returncode
        if message is None:
            message = f"Command failed ({returncode}): {' '.join(self.cmd)}"
        # Propagate the child's exit status, but never report success
        super().__init__(message, exit_code=returncode if returncode > 0 else 1)


class DownloadFailure(CommandFailed):
    """Fetching a remote archive failed"""


class RuntimeInstallFailure(CommandFailed):
    """Removing or extracting the runtime installation failed"""


class PackageManagerFailure(CommandFailed):
    """The OS package manager (or its bootstrap) failed"""


class RepositoryCloneFailure(CommandFailed):
    """Cloning or updating a source repository failed"""


class ToolFetchFailure(CommandFailed):
    """Building or fetching a named tool failed"""

    def __init__(self, tool: str, cmd: Sequence[str], returncode: int):
        super().__init__(cmd, returncode, f"Failed to install {tool} ({returncode}): {' '.join(cmd)}")
        self.tool = tool
