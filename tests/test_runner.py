"""
Tests for CommandRunner and PATH helpers
"""
import subprocess

import pytest

from reconstrap.errors import CommandFailed, DownloadFailure
from reconstrap.platform.runner import CommandRunner, append_path, path_entries


class ScriptedRun:
    """Stand-in for subprocess.run returning queued exit codes"""

    def __init__(self, *codes):
        self.codes = list(codes)
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        code = self.codes.pop(0) if self.codes else 0
        if code is None:
            raise FileNotFoundError(cmd[0])
        return subprocess.CompletedProcess(cmd, code, '', 'boom\n' if code else '')


@pytest.fixture
def scripted(monkeypatch):
    def _install(*codes):
        fake = ScriptedRun(*codes)
        monkeypatch.setattr('reconstrap.platform.runner.subprocess.run', fake)
        monkeypatch.setattr('reconstrap.platform.runner.time.sleep', lambda _s: None)
        return fake
    return _install


class TestPrivileged:

    def test_sudo_prefix(self):
        assert CommandRunner().privileged(['yum', 'install']) == ['sudo', 'yum', 'install']

    def test_root_has_no_prefix(self):
        assert CommandRunner(is_root=True).privileged(['yum']) == ['yum']

    def test_disabled(self):
        assert CommandRunner(use_sudo=False).privileged(['yum']) == ['yum']


class TestRun:

    def test_passes_context_env(self, scripted):
        fake = scripted(0)
        env = {'PATH': '/bin', 'GOPATH': '/tmp/go'}

        CommandRunner(env=env).run(['go', 'env'], cwd='/tmp')

        _cmd, kwargs = fake.calls[0]
        assert kwargs['env'] is env
        assert kwargs['cwd'] == '/tmp'

    def test_failure_raises_given_error(self, scripted):
        scripted(4)

        with pytest.raises(DownloadFailure) as exc:
            CommandRunner().run(['wget', 'x'], error=DownloadFailure)

        assert exc.value.returncode == 4
        assert exc.value.exit_code == 4

    def test_unchecked_failure_returns_result(self, scripted):
        scripted(2)
        result = CommandRunner().run(['false'], check=False)
        assert result.returncode == 2

    def test_missing_executable_is_127(self, scripted):
        scripted(None)
        with pytest.raises(CommandFailed) as exc:
            CommandRunner().run(['no-such-tool'])
        assert exc.value.exit_code == 127

    def test_retries_until_success(self, scripted):
        fake = scripted(1, 1, 0)
        result = CommandRunner(retries=3).run(['git', 'clone', 'x'])
        assert result.returncode == 0
        assert len(fake.calls) == 3

    def test_retries_exhausted(self, scripted):
        fake = scripted(1, 1)
        with pytest.raises(CommandFailed):
            CommandRunner(retries=2).run(['git', 'clone', 'x'])
        assert len(fake.calls) == 2

    def test_quiet_captures_output(self, scripted):
        fake = scripted(0)
        CommandRunner(quiet=True).run(['apt-get', 'update'])
        assert fake.calls[0][1]['capture_output'] is True

    def test_dry_run_records_only(self, no_subprocess):
        runner = CommandRunner(dry_run=True)

        result = runner.run(['sudo', 'rm', '-rf', '/usr/local/go'])

        assert result.returncode == 0
        assert runner.history == [['sudo', 'rm', '-rf', '/usr/local/go']]


class TestProbe:

    def test_returns_stdout(self, monkeypatch):
        monkeypatch.setattr(
            'reconstrap.platform.runner.subprocess.run',
            lambda cmd, **kw: subprocess.CompletedProcess(cmd, 0, 'go version go1.22.1 linux/amd64\n', ''),
        )
        assert CommandRunner().probe(['go', 'version']).startswith('go version')

    def test_failure_is_none(self, scripted):
        scripted(1)
        assert CommandRunner().probe(['go', 'version']) is None

    def test_missing_binary_is_none(self, scripted):
        scripted(None)
        assert CommandRunner().probe(['go', 'version']) is None


class TestPath:

    def test_append_once(self):
        env = {'PATH': '/usr/bin:/bin'}

        assert append_path(env, '/usr/local/go/bin')
        assert not append_path(env, '/usr/local/go/bin')

        assert env['PATH'] == '/usr/bin:/bin:/usr/local/go/bin'

    def test_empty_path(self):
        env = {}
        append_path(env, '/opt/bin')
        assert path_entries(env) == ['/opt/bin']

    def test_which_uses_context_path(self, tmp_path):
        from conftest import make_executable
        make_executable(tmp_path, 'subfinder')
        runner = CommandRunner(env={'PATH': str(tmp_path)})
        assert runner.which('subfinder') == str(tmp_path / 'subfinder')
        assert CommandRunner(env={'PATH': ''}).which('subfinder') is None


class TestPrependPath:

    def test_moves_existing_entry_to_front(self):
        env = {'PATH': '/usr/bin:/usr/local/go/bin'}

        assert append_path(env, '/usr/local/go/bin', prepend=True)

        assert env['PATH'] == '/usr/local/go/bin:/usr/bin'

    def test_already_first(self):
        env = {'PATH': '/usr/local/go/bin:/usr/bin'}
        assert not append_path(env, '/usr/local/go/bin', prepend=True)
        assert env['PATH'] == '/usr/local/go/bin:/usr/bin'
