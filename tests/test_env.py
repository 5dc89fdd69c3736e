"""Tests for deltae_vision.core.env — .env parsing, walk-up and layering."""

import os
from pathlib import Path

import pytest
from deltae_vision.core.config import build_config
from deltae_vision.core.env import _find_dotenv, _parse_dotenv, load_env


class TestParseDotenv:
    def test_simple_key_value(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('DELTAE_FORMULA=CIE94\n')
        assert _parse_dotenv(f) == {'DELTAE_FORMULA': 'CIE94'}

    def test_quoted_values(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('DELTAE_PALETTE="my palette.json"\nDELTAE_FORMULA=\'CIE76\'\n')
        assert _parse_dotenv(f) == {'DELTAE_PALETTE': 'my palette.json', 'DELTAE_FORMULA': 'CIE76'}

    def test_comments_and_blank_lines_ignored(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('# comment\n\nDELTAE_CLUSTERS=3\n\n')
        assert _parse_dotenv(f) == {'DELTAE_CLUSTERS': '3'}

    def test_trailing_comment(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('DELTAE_ITERATIONS=10  # more rounds\n')
        assert _parse_dotenv(f) == {'DELTAE_ITERATIONS': '10'}

    def test_no_value(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('NOEQUALS\nDELTAE_CLUSTERS=4\n')
        assert _parse_dotenv(f) == {'DELTAE_CLUSTERS': '4'}

    def test_export_prefix(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('export DELTAE_CLUSTERS=7\n')
        assert _parse_dotenv(f) == {'DELTAE_CLUSTERS': '7'}

    def test_other_keys_ignored(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('OPENAI_API_KEY=sk-test\nDELTAE_FORMULA=CIE76\n')
        assert _parse_dotenv(f) == {'DELTAE_FORMULA': 'CIE76'}


class TestFindDotenv:
    def test_finds_in_cwd(self, tmp_path: Path) -> None:
        dotenv = tmp_path / '.env'
        dotenv.write_text('X=1\n')
        assert _find_dotenv(tmp_path) == dotenv

    def test_finds_in_parent(self, tmp_path: Path) -> None:
        subdir = tmp_path / 'sub'
        subdir.mkdir()
        dotenv = tmp_path / '.env'
        dotenv.write_text('X=1\n')
        assert _find_dotenv(subdir) == dotenv

    def test_stops_at_git_dir(self, tmp_path: Path) -> None:
        # .env is above .git — should not be found
        parent = tmp_path / 'repo'
        parent.mkdir()
        (tmp_path / '.env').write_text('X=1\n')
        (parent / '.git').mkdir()
        subdir = parent / 'src'
        subdir.mkdir()
        assert _find_dotenv(subdir) is None

    def test_stops_at_git_file(self, tmp_path: Path) -> None:
        # .git as a file (worktree)
        parent = tmp_path / 'repo'
        parent.mkdir()
        (tmp_path / '.env').write_text('X=1\n')
        (parent / '.git').write_text('gitdir: ../somewhere\n')
        subdir = parent / 'src'
        subdir.mkdir()
        assert _find_dotenv(subdir) is None


class TestLoadEnv:
    def test_reads_dotenv_from_walk_up(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / '.git').mkdir()
        (tmp_path / '.env').write_text('DELTAE_CLUSTERS=3\n')
        monkeypatch.chdir(tmp_path)
        env = load_env(environ={})
        assert env.path == tmp_path / '.env'
        assert env.values['DELTAE_CLUSTERS'] == '3'

    def test_process_environment_wins(self, tmp_path: Path) -> None:
        dotenv = tmp_path / 'custom.env'
        dotenv.write_text('DELTAE_FORMULA=CIE76\nDELTAE_CLUSTERS=9\n')
        env = load_env(env_file=str(dotenv), environ={'DELTAE_FORMULA': 'CIE94'})
        assert env.values['DELTAE_FORMULA'] == 'CIE94'
        assert env.values['DELTAE_CLUSTERS'] == '9'

    def test_os_environ_untouched(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv('DELTAE_ITERATIONS', raising=False)
        dotenv = tmp_path / 'custom.env'
        dotenv.write_text('DELTAE_ITERATIONS=12\n')
        env = load_env(env_file=str(dotenv))
        assert env.values['DELTAE_ITERATIONS'] == '12'
        assert 'DELTAE_ITERATIONS' not in os.environ

    def test_feeds_build_config(self, tmp_path: Path) -> None:
        dotenv = tmp_path / 'custom.env'
        dotenv.write_text('DELTAE_FORMULA=cie76\nDELTAE_ITERATIONS=2\n')
        config = build_config(clusters=4, environ=load_env(env_file=str(dotenv), environ={}).values)
        assert config.formula.value == 'CIE76'
        assert config.iterations == 2
        assert config.cluster_count == 4

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        env = load_env(env_file=str(tmp_path / 'nope.env'), environ={'DELTAE_CLUSTERS': '2'})
        assert env.path is None
        assert env.values == {'DELTAE_CLUSTERS': '2'}

    def test_none_when_repo_has_no_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / '.git').mkdir()
        monkeypatch.chdir(tmp_path)
        assert load_env().path is None
