"""Unit tests for application launching."""

import subprocess
from unittest.mock import patch

import pytest

from jumpapp.errors import CommandNotFound
from jumpapp.services.launcher import Launcher, build_argv, resolve_command


class TestResolveCommand:
    def test_found(self):
        with patch("shutil.which", return_value="/usr/bin/firefox"):
            assert resolve_command("firefox") == "/usr/bin/firefox"

    def test_not_found(self):
        with patch("shutil.which", return_value=None):
            with pytest.raises(CommandNotFound, match="no-such-app"):
                resolve_command("no-such-app")


def test_build_argv_keeps_typed_name():
    assert build_argv("firefox", ["-P", "work"]) == ["firefox", "-P", "work"]


class TestLauncher:
    def test_fork_spawns_detached_child(self):
        with patch("shutil.which", return_value="/usr/bin/firefox"), \
             patch("subprocess.Popen") as mock_popen:
            Launcher().launch("firefox", ["--new-window"], fork=True)

        mock_popen.assert_called_once_with(
            ["firefox", "--new-window"],
            executable="/usr/bin/firefox",
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )

    def test_fork_does_not_wait(self):
        with patch("shutil.which", return_value="/usr/bin/firefox"), \
             patch("subprocess.Popen") as mock_popen:
            Launcher().launch("firefox")

        mock_popen.return_value.wait.assert_not_called()
        mock_popen.return_value.communicate.assert_not_called()

    def test_no_fork_replaces_process(self):
        with patch("shutil.which", return_value="/usr/bin/firefox"), \
             patch("os.execv") as mock_execv, \
             patch("subprocess.Popen") as mock_popen:
            Launcher().launch("firefox", ["-P"], fork=False)

        mock_execv.assert_called_once_with("/usr/bin/firefox", ["firefox", "-P"])
        mock_popen.assert_not_called()

    def test_unknown_command_fails_before_spawn(self):
        with patch("shutil.which", return_value=None), \
             patch("subprocess.Popen") as mock_popen, \
             patch("os.execv") as mock_execv:
            with pytest.raises(CommandNotFound):
                Launcher().launch("no-such-app")

        mock_popen.assert_not_called()
        mock_execv.assert_not_called()
