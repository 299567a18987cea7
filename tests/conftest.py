"""
Shared fixtures for reconstrap tests

Nothing here spawns real processes: FakeRunner records commands and
returns scripted exit codes; `which` resolves against fake executables
created in a temporary bin directory.
"""
import os
import subprocess
from pathlib import Path

import pytest

from reconstrap.config import ReconstrapConfig
from reconstrap.core.context import InstallContext
from reconstrap.errors import CommandFailed
from reconstrap.platform.detector import PlatformInfo, PlatformKind
from reconstrap.platform.runner import CommandRunner


class FakeRunner(CommandRunner):
    """Records commands instead of running them"""

    def __init__(self, failures=None, probes=None, **kwargs):
        super().__init__(**kwargs)
        # substring of the joined command -> exit status
        self.failures = dict(failures or {})
        # executable path or basename -> stdout returned by probe()
        self.probes = dict(probes or {})
        self.cwds = []

    def _returncode(self, cmd):
        joined = ' '.join(cmd)
        for needle, code in self.failures.items():
            if needle in joined:
                return code
        return 0

    def run(self, cmd, cwd=None, capture=False, check=True, error=CommandFailed):
        cmd = [str(part) for part in cmd]
        self.history.append(cmd)
        self.cwds.append(cwd)
        code = 0 if self.dry_run else self._returncode(cmd)
        if code != 0 and check:
            raise error(cmd, code)
        return subprocess.CompletedProcess(cmd, code, '', '')

    def probe(self, cmd):
        exe = str(cmd[0])
        if exe in self.probes:
            return self.probes[exe]
        return self.probes.get(Path(exe).name)

    def commands_containing(self, needle):
        return [c for c in self.history if needle in ' '.join(c)]


def make_executable(directory: Path, name: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text('#!/bin/sh\nexit 0\n')
    path.chmod(0o755)
    return path


def make_platform(kind=PlatformKind.DEBIAN, architecture='x86_64', is_root=False) -> PlatformInfo:
    identifier = 'darwin23' if kind == PlatformKind.MACOS else 'linux-gnu'
    return PlatformInfo(
        kind=kind,
        identifier=identifier,
        architecture=architecture,
        shell='bash',
        is_root=is_root,
    )


@pytest.fixture
def home(tmp_path):
    path = tmp_path / 'home'
    path.mkdir()
    return path


@pytest.fixture
def bin_dir(tmp_path):
    path = tmp_path / 'bin'
    path.mkdir()
    return path


@pytest.fixture
def config(tmp_path_factory):
    """Defaults, but the runtime lives under a temp dir instead of /usr/local"""
    cfg = ReconstrapConfig()
    cfg.runtime_install_root = str(tmp_path_factory.mktemp('usr-local'))
    return cfg


@pytest.fixture
def make_ctx(home, bin_dir, config):
    """Factory for an InstallContext wired to a FakeRunner"""
    def _make(kind=PlatformKind.DEBIAN, architecture='x86_64', is_root=False,
              failures=None, probes=None, dry_run=False, use_latest=False, cfg=None):
        cfg = cfg or config
        runner = FakeRunner(
            failures=failures,
            probes=probes,
            dry_run=dry_run,
            use_sudo=cfg.installation_use_sudo,
            is_root=is_root,
        )
        env = {'PATH': str(bin_dir), 'HOME': str(home)}
        return InstallContext.create(
            make_platform(kind, architecture, is_root),
            cfg,
            home=home,
            env=env,
            runner=runner,
            dry_run=dry_run,
            use_latest=use_latest,
        )
    return _make


@pytest.fixture
def no_subprocess(monkeypatch):
    """Fail the test if anything reaches subprocess.run"""
    def _forbidden(*args, **kwargs):
        raise AssertionError(f"unexpected subprocess call: {args!r}")
    monkeypatch.setattr('reconstrap.platform.runner.subprocess.run', _forbidden)


def snapshot(root: Path):
    """Relative paths and contents of every file under root"""
    result = {}
    for dirpath, _dirnames, filenames in os.walk(root):
        for name in filenames:
            path = Path(dirpath) / name
            if path.is_symlink():
                result[str(path.relative_to(root))] = ('link', os.readlink(path))
            else:
                result[str(path.relative_to(root))] = path.read_text()
    return result
