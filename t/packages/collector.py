#!/usr/bin/env python3
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'lib'))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'lib'))

from AptVersions.Errors import CollectionError
from AptVersions.Packages import Collector
from AptVersions.Packages.Collector import (
    DPKG_QUERY_COMMAND, CommandSource, DpkgQuerySource, FileSource, PackageSource,
    StringSource, get_installed_packages,
)
from AptVersions.Tools import CommandResult
from recording_backend import recording_logger

RESOURCES = os.path.join(os.path.dirname(__file__), '..', '..', 'resources', 'linux', 'dpkg')

unix_only = pytest.mark.skipif(sys.platform.startswith('win'), reason="needs a POSIX shell")


class FailingSource(PackageSource):

    def read_listing(self, logger=None):
        raise CollectionError("listing unavailable", command="fake", status=2, stderr="boom")


class TestGetInstalledPackages:

    def test_string_source(self):
        packages, steps = get_installed_packages(StringSource("wget 1.20.3\nacl 2.3.2-1build1.1\n"))

        assert packages.as_dict() == {"wget": "1.20.3", "acl": "2.3.2"}
        assert [step.title for step in steps] == [
            "Collect installed packages",
            "Normalize package versions",
        ]
        assert "provided listing" in steps[0].description

    def test_file_source(self):
        path = os.path.join(RESOURCES, 'ubuntu-24.04')
        packages, steps = get_installed_packages(FileSource(path))

        assert len(packages) == 29
        assert str(packages["openssh-server"]) == "9.6.0"
        assert path in steps[0].description

    def test_missing_file(self, tmp_path):
        with pytest.raises(CollectionError) as excinfo:
            get_installed_packages(FileSource(str(tmp_path / "missing")))
        assert "can't read package listing file" in str(excinfo.value)

    def test_failure_propagates(self):
        with pytest.raises(CollectionError) as excinfo:
            get_installed_packages(FailingSource())

        assert excinfo.value.status == 2
        assert excinfo.value.stderr == "boom"
        assert str(excinfo.value) == "listing unavailable: boom"

    def test_logs_count(self):
        logger, backend = recording_logger(debug=0)

        get_installed_packages(StringSource("wget 1.20.3\n"), logger=logger)

        assert backend.levels('info') == ["1 installed package(s) collected"]
        assert backend.levels('debug') == []


@unix_only
class TestCommandSource:

    def test_success(self):
        source = CommandSource("printf 'wget 1.20.3\\nnano 7.2-2ubuntu0.1\\n'")
        packages, _ = get_installed_packages(source)

        assert packages.as_dict() == {"wget": "1.20.3", "nano": "7.2.0"}

    def test_non_zero_exit(self):
        logger, backend = recording_logger()
        source = CommandSource("printf 'wget 1.20.3\\n'; echo 'database locked' >&2; exit 3")

        with pytest.raises(CollectionError) as excinfo:
            get_installed_packages(source, logger=logger)

        assert excinfo.value.status == 3
        assert "database locked" in excinfo.value.stderr
        assert "exit status 3" in str(excinfo.value)
        assert backend.levels('error') == ["stderr: database locked"]

    def test_stderr_on_success_is_a_warning(self):
        logger, backend = recording_logger()
        source = CommandSource("echo 'dpkg-query: warning: files list missing' >&2; printf 'wget 1.20.3\\n'")

        packages, _ = get_installed_packages(source, logger=logger)

        assert packages.as_dict() == {"wget": "1.20.3"}
        warnings = backend.levels('warning')
        assert len(warnings) == 1
        assert "continuing as exited successfully" in warnings[0]
        assert "files list missing" in warnings[0]

    def test_timeout(self):
        source = CommandSource("sleep 2", timeout=0.2)

        with pytest.raises(CollectionError) as excinfo:
            source.read_listing()
        assert "timeout" in str(excinfo.value)
        assert excinfo.value.status is None

    def test_unknown_command(self):
        with pytest.raises(CollectionError) as excinfo:
            CommandSource("/nonexistent/package-lister").read_listing()
        assert excinfo.value.status == 127

    def test_large_output_is_drained(self):
        source = CommandSource("i=0; while [ $i -lt 20000 ]; do echo \"pkg$i 1.$i\"; i=$((i+1)); done")
        packages, _ = get_installed_packages(source)

        assert len(packages) == 20000
        assert str(packages["pkg19999"]) == "1.19999.0"


class TestDpkgQuerySource:

    def test_runs_dpkg_query(self, monkeypatch):
        calls = []

        def fake_run_command(command, logger=None, timeout=None):
            calls.append((command, timeout))
            return CommandResult(command, 0, "libattr1 1:2.5.2-1build1.1\n", "")

        monkeypatch.setattr(Collector, 'run_command', fake_run_command)

        packages, steps = get_installed_packages(DpkgQuerySource(timeout=30))

        assert calls == [(DPKG_QUERY_COMMAND, 30)]
        assert packages.as_dict() == {"libattr1": "2.5.2"}
        assert "dpkg-query -W" in steps[0].description

    def test_is_enabled(self, monkeypatch):
        monkeypatch.setattr(Collector, 'can_run', lambda binary: binary == 'dpkg-query')
        assert DpkgQuerySource.is_enabled()

        monkeypatch.setattr(Collector, 'can_run', lambda binary: False)
        assert not DpkgQuerySource.is_enabled()
