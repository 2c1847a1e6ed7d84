"""Tests for the git subprocess wrapper."""

import shutil
import subprocess
from unittest.mock import MagicMock

import pytest

from prguard_core.commits import check_commit_messages
from prguard_core.errors import GitCommandError
from prguard_core.utils.git import log_commit_ids, read_commit_message, run_git

SHA = "a" * 40
SHA2 = "b" * 40


class TestRunGit:
    def test_builds_command_without_shell(self, mocker):
        run = mocker.patch("subprocess.run", return_value=MagicMock(returncode=0, stdout="out", stderr=""))
        assert run_git("/repo", "status") == "out"
        args, kwargs = run.call_args
        assert args[0] == ["git", "-C", "/repo", "status"]
        assert "shell" not in kwargs

    def test_decodes_output_leniently(self, mocker):
        run = mocker.patch("subprocess.run", return_value=MagicMock(returncode=0, stdout="out", stderr=""))
        run_git("/repo", "log")
        kwargs = run.call_args.kwargs
        assert kwargs["encoding"] == "utf-8"
        assert kwargs["errors"] == "replace"

    def test_nonzero_exit_raises_with_output(self, mocker):
        mocker.patch("subprocess.run", return_value=MagicMock(returncode=128, stdout="", stderr="fatal: bad"))
        with pytest.raises(GitCommandError) as exc_info:
            run_git("/repo", "log")
        assert exc_info.value.returncode == 128
        assert exc_info.value.stderr == "fatal: bad"
        assert exc_info.value.command == ["git", "-C", "/repo", "log"]

    def test_missing_git_raises(self, mocker):
        mocker.patch("subprocess.run", side_effect=FileNotFoundError("git"))
        with pytest.raises(GitCommandError) as exc_info:
            run_git("/repo", "log")
        assert exc_info.value.returncode is None

    def test_timeout_raises(self, mocker):
        mocker.patch("subprocess.run", side_effect=subprocess.TimeoutExpired(cmd="git", timeout=60))
        with pytest.raises(GitCommandError):
            run_git("/repo", "log")


class TestLogCommitIds:
    def test_parses_ids_and_drops_blank_lines(self, mocker):
        mocker.patch("prguard_core.utils.git.run_git", return_value=f"{SHA}\n{SHA2}\n\n")
        assert log_commit_ids("/repo", "target", "merged") == [SHA, SHA2]

    def test_range_order(self, mocker):
        run = mocker.patch("prguard_core.utils.git.run_git", return_value="")
        log_commit_ids("/repo", "target", "merged")
        run.assert_called_once_with("/repo", "log", "--pretty=format:%H", "--end-of-options", "target..merged")


class TestReadCommitMessage:
    def test_strips_headers(self, mocker):
        raw = f"tree {SHA}\nparent {SHA2}\nauthor A <a@x> 0 +0000\ncommitter A <a@x> 0 +0000\n\nfoo: bar\n\nbody\n"
        mocker.patch("prguard_core.utils.git.run_git", return_value=raw)
        assert read_commit_message("/repo", SHA) == "foo: bar\n\nbody\n"

    def test_message_without_trailing_newline(self, mocker):
        mocker.patch("prguard_core.utils.git.run_git", return_value=f"tree {SHA}\n\nfoo: bar")
        assert read_commit_message("/repo", SHA) == "foo: bar"


@pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
class TestAgainstRealRepository:
    def _git(self, path, *args):
        identity = ["-c", "user.name=Test", "-c", "user.email=test@example.com", "-c", "commit.gpgsign=false"]
        subprocess.run(
            ["git", "-C", str(path), *identity, *args],
            check=True,
            capture_output=True,
        )

    def _head(self, path):
        return subprocess.run(
            ["git", "-C", str(path), "rev-parse", "HEAD"], check=True, capture_output=True, text=True
        ).stdout.strip()

    def test_lints_commit_range(self, tmp_path):
        self._git(tmp_path, "init", "-q")
        self._git(tmp_path, "commit", "-q", "--allow-empty", "-m", "base: initial commit")
        target = self._head(tmp_path)
        self._git(tmp_path, "commit", "-q", "--allow-empty", "-m", "hello: 1.0 -> 2.0")
        self._git(tmp_path, "commit", "-q", "--allow-empty", "-m", "Fix the build.")
        merged = self._head(tmp_path)

        report = check_commit_messages(merged, target, str(tmp_path))

        assert len(report.commit_ids) == 2
        assert report.commit_ids[0] == merged
        assert [v.rule for v in report.violations] == ["missing-colon", "trailing-period"]
        assert all(v.commit_id == merged for v in report.violations)

    def test_bad_revision_raises(self, tmp_path):
        self._git(tmp_path, "init", "-q")
        self._git(tmp_path, "commit", "-q", "--allow-empty", "-m", "base: initial commit")
        with pytest.raises(GitCommandError):
            check_commit_messages("HEAD", "does-not-exist", str(tmp_path))

    def test_lints_latin1_commit_message(self, tmp_path):
        self._git(tmp_path, "init", "-q")
        self._git(tmp_path, "commit", "-q", "--allow-empty", "-m", "base: initial commit")
        target = self._head(tmp_path)
        message = tmp_path / "latin1-message.txt"
        message.write_bytes("caf\xe9: fix build\n".encode("latin-1"))
        self._git(tmp_path, "-c", "i18n.commitEncoding=latin1", "commit", "-q", "--allow-empty", "-F", str(message))
        merged = self._head(tmp_path)

        report = check_commit_messages(merged, target, str(tmp_path))

        assert report.commit_ids == [merged]
        assert report.passed

    def test_option_like_revision_is_not_parsed_as_option(self, tmp_path):
        self._git(tmp_path, "init", "-q")
        self._git(tmp_path, "commit", "-q", "--allow-empty", "-m", "base: initial commit")

        with pytest.raises(GitCommandError):
            check_commit_messages("HEAD", "--output=leaked", str(tmp_path))

        assert list(tmp_path.glob("leaked*")) == []
