"""
Tests for the reconstrap command line
"""
import pytest
import yaml
from click.testing import CliRunner

from conftest import make_platform
from reconstrap import __version__
from reconstrap.cli import main
from reconstrap.errors import UnsupportedPlatform


@pytest.fixture
def cli_env(tmp_path, home, bin_dir, monkeypatch):
    """Debian host with an empty PATH, HOME and cwd under tmp_path"""
    monkeypatch.setattr('reconstrap.platform.detect_platform', lambda: make_platform())
    monkeypatch.setenv('HOME', str(home))
    monkeypatch.setenv('PATH', str(bin_dir))
    workdir = tmp_path / 'work'
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    config_path = workdir / 'isolated.yml'
    config_path.write_text(yaml.safe_dump({
        'runtime': {'install_root': str(tmp_path / 'usr-local')},
    }))
    return config_path


def test_version_flag():
    result = CliRunner().invoke(main, ['--version'])
    assert result.exit_code == 0
    assert f"reconstrap v{__version__}" in result.output


def test_declined_prompt_cancels(cli_env, home, no_subprocess):
    result = CliRunner().invoke(main, ['install', '--config', str(cli_env)], input='n\n')

    assert result.exit_code == 0
    assert 'Installation cancelled' in result.output
    assert list(home.iterdir()) == []


def test_eof_on_prompt_cancels(cli_env, home, no_subprocess):
    result = CliRunner().invoke(main, ['install', '--config', str(cli_env)], input='')

    assert result.exit_code == 0
    assert 'cancelled' in result.output
    assert list(home.iterdir()) == []


def test_answer_other_than_y_cancels(cli_env, home, no_subprocess):
    result = CliRunner().invoke(main, ['install', '--config', str(cli_env)], input='yes\n')
    assert result.exit_code == 0
    assert 'cancelled' in result.output


def test_dry_run_install_writes_nothing(cli_env, home, no_subprocess):
    result = CliRunner().invoke(
        main, ['install', '-y', '--dry-run', '--config', str(cli_env)]
    )

    assert result.exit_code == 0, result.output
    assert 'dry-run' in result.output
    assert 'apt-get' in result.output
    assert list(home.iterdir()) == []


def test_unsupported_platform_exits_before_prompt(cli_env, monkeypatch, no_subprocess):
    def _unsupported():
        raise UnsupportedPlatform('cygwin')

    monkeypatch.setattr('reconstrap.platform.detect_platform', _unsupported)

    result = CliRunner().invoke(main, ['install'], input='y\n')

    assert result.exit_code == 1
    assert 'cygwin' in result.output
    assert 'Continue?' not in result.output


def test_verify_reports_missing_tools(cli_env):
    result = CliRunner().invoke(main, ['verify', '--config', str(cli_env)])

    assert result.exit_code == 0
    assert 'Some tools failed to install' in result.output


def test_verify_strict_fails_on_missing(cli_env):
    result = CliRunner().invoke(main, ['verify', '--strict', '--config', str(cli_env)])
    assert result.exit_code == 1


def test_detect_shows_platform(cli_env):
    result = CliRunner().invoke(main, ['detect'])

    assert result.exit_code == 0
    assert 'amd64' in result.output


def test_versions_lists_pinned_tools():
    result = CliRunner().invoke(main, ['versions'])

    assert result.exit_code == 0
    assert 'subfinder' in result.output
    assert 'v3.2.9' in result.output


def test_config_init(cli_env, tmp_path):
    runner = CliRunner()
    target = tmp_path / 'work' / '.reconstrap.yml'

    first = runner.invoke(main, ['config', '--init'])
    assert first.exit_code == 0
    assert target.exists()
    assert yaml.safe_load(target.read_text())['runtime']['install_root'] == '/usr/local'

    second = runner.invoke(main, ['config', '--init'])
    assert second.exit_code == 1

    forced = runner.invoke(main, ['config', '--init', '--force'])
    assert forced.exit_code == 0


def test_config_shows_effective_values(cli_env, tmp_path):
    (tmp_path / 'work' / '.reconstrap.yml').write_text('alias_dir: ~/bin\n')

    result = CliRunner().invoke(main, ['config'])

    assert result.exit_code == 0
    assert 'alias_dir: ~/bin' in result.output
