#!/usr/bin/env python3
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'lib'))

from AptVersions.Errors import CollectionError
from AptVersions.Tools import (
    can_run, get_all_lines, loggable_command, run_command, trim_whitespace,
)

unix_only = pytest.mark.skipif(sys.platform.startswith('win'), reason="needs a POSIX shell")


class TestTools:

    def test_trim_whitespace(self):
        assert trim_whitespace("  dpkg-query \n   -W ") == "dpkg-query -W"
        assert trim_whitespace(None) is None

    def test_loggable_command(self):
        command = "dpkg-query " + " ".join(f"--opt{i}" for i in range(40))
        logged = loggable_command(command)

        assert len(logged) <= 124
        assert logged.endswith(" ...")
        assert loggable_command(["dpkg-query", "-W"]) == "dpkg-query -W"

    def test_get_all_lines(self, tmp_path):
        listing = tmp_path / "listing"
        listing.write_text("wget 1.20.3\nacl 2.3.2\n")

        assert get_all_lines(file=str(listing)) == ["wget 1.20.3", "acl 2.3.2"]
        assert get_all_lines(string="") == []
        assert get_all_lines(file=str(tmp_path / "missing")) is None

    def test_get_all_lines_splits_on_line_feed_only(self, tmp_path):
        listing = tmp_path / "listing"
        listing.write_bytes(b"wget 1.20.3\r\nacl 2.3.2\x0cbash 5.2\n")

        assert get_all_lines(file=str(listing)) == ["wget 1.20.3\r", "acl 2.3.2\x0cbash 5.2"]
        assert get_all_lines(string="a 1\x1cb 2\u2028c 3") == ["a 1\x1cb 2\u2028c 3"]

    def test_get_all_lines_needs_input(self):
        with pytest.raises(ValueError):
            get_all_lines()


@unix_only
class TestRunCommand:

    def test_captures_both_streams(self):
        result = run_command("echo out; echo err >&2; exit 4")

        assert result.status == 4
        assert not result.success
        assert result.stdout == "out\n"
        assert result.stderr == "err\n"

    def test_c_locale(self):
        result = run_command("echo $LC_ALL")
        assert result.stdout.strip() == "C"

    def test_list_command(self):
        result = run_command(["sh", "-c", "printf ok"])
        assert result.success
        assert result.stdout == "ok"

    def test_cannot_start(self):
        with pytest.raises(CollectionError, match="Can't run command"):
            run_command(["/nonexistent/package-lister"])

    def test_can_run(self):
        assert can_run("sh")
        assert not can_run("/nonexistent/package-lister")
