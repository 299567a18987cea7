"""
Tests for shell profile persistence (Environment Configurator)
"""
import pytest

from reconstrap.core.results import StepStatus
from reconstrap.platform.profile import (
    EnvironmentConfigurator,
    ProfileDirective,
    apply_profile_edits,
    candidate_profiles,
    plan_profile_edits,
)

LOCAL_BIN = ProfileDirective(marker='.local/bin', lines=('export PATH=$PATH:$HOME/.local/bin',))


class TestPlanAndApply:

    def test_appending_twice_keeps_one_occurrence(self, tmp_path):
        bashrc = tmp_path / '.bashrc'
        bashrc.write_text('alias ll="ls -l"\n')

        for _ in range(2):
            apply_profile_edits(plan_profile_edits([bashrc], [LOCAL_BIN]))

        assert bashrc.read_text().count('export PATH=$PATH:$HOME/.local/bin') == 1
        assert bashrc.read_text().startswith('alias ll="ls -l"\n')

    def test_marker_present_means_no_edit(self, tmp_path):
        bashrc = tmp_path / '.bashrc'
        bashrc.write_text('export PATH="$HOME/.local/bin:$PATH"\n')

        assert plan_profile_edits([bashrc], [LOCAL_BIN]) == []

    def test_missing_file_is_created(self, tmp_path):
        bashrc = tmp_path / '.bashrc'
        apply_profile_edits(plan_profile_edits([bashrc], [LOCAL_BIN]))
        assert bashrc.read_text() == 'export PATH=$PATH:$HOME/.local/bin\n'

    def test_file_without_trailing_newline(self, tmp_path):
        bashrc = tmp_path / '.bashrc'
        bashrc.write_text('export EDITOR=vim')
        apply_profile_edits(plan_profile_edits([bashrc], [LOCAL_BIN]))
        assert bashrc.read_text().splitlines() == [
            'export EDITOR=vim',
            'export PATH=$PATH:$HOME/.local/bin',
        ]


class TestCandidateProfiles:

    def test_zshrc_only_when_present(self, make_ctx, home):
        ctx = make_ctx()
        assert candidate_profiles(ctx) == [home / '.bashrc']

        (home / '.zshrc').write_text('')
        assert candidate_profiles(ctx) == [home / '.bashrc', home / '.zshrc']


class TestEnvironmentConfigurator:

    def test_configure_writes_exports(self, make_ctx, home, config):
        ctx = make_ctx()

        result = EnvironmentConfigurator().configure(ctx)

        assert result.status == StepStatus.SUCCESS
        content = (home / '.bashrc').read_text().splitlines()
        assert content == [
            f'export PATH=$PATH:{config.runtime_bin_dir}',
            'export GOPATH=$HOME/go',
            'export PATH=$PATH:$GOPATH/bin',
        ]

    def test_configure_is_idempotent(self, make_ctx, home):
        (home / '.zshrc').write_text('# zsh\n')

        for _ in range(3):
            EnvironmentConfigurator().configure(make_ctx())

        for name in ('.bashrc', '.zshrc'):
            content = (home / name).read_text()
            assert content.count('export GOPATH=$HOME/go') == 1
            assert content.count('export PATH=$PATH:$GOPATH/bin') == 1

    def test_second_run_reports_skipped(self, make_ctx):
        EnvironmentConfigurator().configure(make_ctx())
        result = EnvironmentConfigurator().configure(make_ctx())
        assert result.status == StepStatus.SKIPPED

    def test_exports_into_context_not_process(self, make_ctx, home, config, monkeypatch):
        monkeypatch.delenv('GOPATH', raising=False)
        ctx = make_ctx()

        EnvironmentConfigurator().configure(ctx)

        path = ctx.env['PATH'].split(':')
        assert ctx.env['GOPATH'] == str(home / 'go')
        assert str(config.runtime_bin_dir) in path
        assert str(home / 'go' / 'bin') in path
        import os
        assert 'GOPATH' not in os.environ

    def test_creates_gopath_skeleton(self, make_ctx, home):
        EnvironmentConfigurator().configure(make_ctx())
        for sub in ('bin', 'src', 'pkg'):
            assert (home / 'go' / sub).is_dir()

    def test_plan_returns_edits_without_writing(self, make_ctx, home):
        edits = EnvironmentConfigurator().plan(make_ctx())
        assert [e.path for e in edits] == [home / '.bashrc']
        assert not (home / '.bashrc').exists()

    def test_dry_run_writes_nothing(self, make_ctx, home):
        EnvironmentConfigurator().configure(make_ctx(dry_run=True))
        assert list(home.iterdir()) == []


class TestNonUtf8Profile:

    LATIN1 = b'# caf\xe9\nexport GOPATH=$HOME/go\nexport PATH=$PATH:$GOPATH/bin'

    def test_markers_found_in_latin1_profile(self, tmp_path):
        bashrc = tmp_path / '.bashrc'
        bashrc.write_bytes(self.LATIN1)
        gopath = ProfileDirective(marker='GOPATH', lines=('export GOPATH=$HOME/go',))

        assert plan_profile_edits([bashrc], [gopath]) == []

    def test_configure_appends_only_missing_line(self, make_ctx, home, config):
        bashrc = home / '.bashrc'
        bashrc.write_bytes(self.LATIN1)

        for _ in range(2):
            EnvironmentConfigurator().configure(make_ctx())

        expected = self.LATIN1 + f'\nexport PATH=$PATH:{config.runtime_bin_dir}\n'.encode()
        assert bashrc.read_bytes() == expected
