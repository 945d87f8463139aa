#!/usr/bin/env python3
import json
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'lib'))

from AptVersions import VERSION_STRING
from AptVersions.Cli import EXIT_COLLECTION_ERROR, EXIT_CONFIG_ERROR, main
from AptVersions.Packages import Collector

RESOURCES = os.path.join(os.path.dirname(__file__), '..', '..', 'resources', 'linux', 'dpkg')


class TestCli:

    def test_version(self, capsys):
        assert main(['--version']) == 0
        assert capsys.readouterr().out.startswith(VERSION_STRING)

    def test_listing_file(self, capsys):
        assert main(['--listing-file', os.path.join(RESOURCES, 'ubuntu-24.04')]) == 0

        output = json.loads(capsys.readouterr().out)
        assert list(output) == ['apt_version']
        assert len(output['apt_version']) == 29
        assert output['apt_version']['libattr1'] == '2.5.2'

    def test_steps_and_data_key(self, capsys):
        assert main([
            '--listing-file', os.path.join(RESOURCES, 'malformed'),
            '--data-key', 'packages',
            '--steps',
        ]) == 0

        captured = capsys.readouterr()
        output = json.loads(captured.out)
        assert output['data'] == {'packages': {'wget': '1.21.4', 'acl': '2.3.2'}}
        assert len(output['steps']) == 2
        assert "[warning] Skipping malformed package line 2: 'badline'" in captured.err

    @pytest.mark.skipif(sys.platform.startswith('win'), reason="needs a POSIX shell")
    def test_command(self, capsys):
        assert main(['--command', "printf 'wget 1:1.20.3-1\\n'"]) == 0
        assert json.loads(capsys.readouterr().out) == {'apt_version': {'wget': '1.20.3'}}

    @pytest.mark.skipif(sys.platform.startswith('win'), reason="needs a POSIX shell")
    def test_command_failure(self, capsys):
        assert main(['--command', "echo 'locked' >&2; exit 2"]) == EXIT_COLLECTION_ERROR

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Failed to collect installed packages" in captured.err

    def test_missing_listing_file(self, tmp_path, capsys):
        assert main(['--listing-file', str(tmp_path / 'missing')]) == EXIT_COLLECTION_ERROR
        assert capsys.readouterr().out == ""

    def test_config_error(self, capsys):
        assert main(['--logger', 'File']) == EXIT_CONFIG_ERROR
        assert "logfile" in capsys.readouterr().err

    def test_no_dpkg(self, monkeypatch, capsys):
        monkeypatch.setattr(Collector, 'can_run', lambda binary: False)

        assert main([]) == EXIT_COLLECTION_ERROR
        assert "No package source available" in capsys.readouterr().err

    def test_debug_logs(self, capsys):
        assert main(['--debug', '--listing-file', os.path.join(RESOURCES, 'ubuntu-24.04')]) == 0
        assert "[debug] Collecting installed packages from file" in capsys.readouterr().err
