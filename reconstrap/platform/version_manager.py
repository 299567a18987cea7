#!/usr/bin/env python3
"""
reconstrap Version Manager

Loads the ordered tool table and pinned versions from tool-versions.lock.
"""

import toml
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional
from rich.console import Console

console = Console()

FALLBACK_RUNTIME_VERSION = "1.23.5"


@dataclass(frozen=True)
class ToolSpec:
    """One third-party tool fetched through the runtime's package mechanism"""
    name: str
    source: str
    version: Optional[str] = None

    def package_spec(self, use_latest: bool = False) -> str:
        """Return 'source@version' (or 'source@latest' when unpinned)"""
        version = 'latest' if use_latest or not self.version else self.version
        return f"{self.source}@{version}"


class VersionManager:
    """Manages pinned versions of external tools"""

    def __init__(self, lock_file: Optional[Path] = None):
        """
        Initialize version manager.

        Args:
            lock_file: Path to tool-versions.lock file (default: packaged copy)
        """
        if lock_file is None:
            lock_file = Path(__file__).parent.parent / "tool-versions.lock"

        self.lock_file = lock_file
        self.data = self._load()

    def _load(self) -> Dict:
        """Load lock file contents"""
        if not self.lock_file.exists():
            console.print(
                f"[yellow]Warning: tool-versions.lock not found at {self.lock_file}[/yellow]"
            )
            return {}

        try:
            with open(self.lock_file) as f:
                return toml.load(f)
        except (OSError, toml.TomlDecodeError) as e:
            console.print(f"[red]Error loading tool-versions.lock: {e}[/red]")
            return {}

    def get_tool_specs(self, category: str = 'go') -> List[ToolSpec]:
        """
        Get the ordered tool table for a category.

        Args:
            category: Table under [tools] (e.g., 'go')

        Returns:
            ToolSpec list in lock-file order
        """
        tools = self.data.get('tools', {}).get(category, {})
        specs = []
        for name, entry in tools.items():
            if isinstance(entry, str):
                # Shorthand: name = "source"
                specs.append(ToolSpec(name=name, source=entry))
            else:
                specs.append(ToolSpec(
                    name=name,
                    source=entry['source'],
                    version=entry.get('version'),
                ))
        return specs

    def get_runtime_version(self, runtime: str = 'go') -> str:
        """Pinned runtime release to download"""
        return self.data.get('runtime', {}).get(runtime, FALLBACK_RUNTIME_VERSION)

    def get_metadata(self) -> Dict:
        """
        Get metadata from lock file.

        Returns:
            Dictionary with lockfile_version, generated_at, reconstrap_version
        """
        return self.data.get('metadata', {})

    def is_locked(self) -> bool:
        """Check if tool versions are locked (lock file exists)"""
        return self.lock_file.exists() and bool(self.data.get('tools'))
