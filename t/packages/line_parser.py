#!/usr/bin/env python3
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'lib'))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'lib'))

from AptVersions.Packages.Parser import PackageRecord, PackageVersionMap, get_packages, parse_line
from AptVersions.Packages.Version import PackageVersion
from recording_backend import recording_logger

RESOURCES = os.path.join(os.path.dirname(__file__), '..', '..', 'resources', 'linux', 'dpkg')

UBUNTU_2404 = {
    "accountsservice": "23.13.9",
    "acl": "2.3.2",
    "adduser": "3.137.0",
    "adwaita-icon-theme": "46.0.0",
    "alsa-base": "1.0.25",
    "amd64-microcode": "3.20231019.1",
    "apg": "2.2.3",
    "g++": "13.2.0",
    "g++-13-x86-64-linux-gnu": "13.3.0",
    "gir1.2-gmenu-3.0": "3.36.0",
    "gir1.2-upowerglib-1.0": "1.90.3",
    "heif-gdk-pixbuf": "1.17.6",
    "libatomic1": "14.2.0",
    "libatopology2t64": "1.2.11",
    "libatspi2.0-0t64": "2.52.0",
    "libattr1": "2.5.2",
    "libaudit-common": "3.1.2",
    "libcairo-gobject-perl": "1.5.0",
    "libdbusmenu-glib4": "18.10.20180917",
    "libjavascriptcoregtk-4.1-0": "2.46.6",
    "libplist-2.0-4": "2.3.0",
    "libplymouth5": "24.4.60",
    "make": "4.3.0",
    "mongodb-mongosh": "2.4.2",
    "nano": "7.2.0",
    "nvidia-driver-550": "550.144.3",
    "openjdk-21-jre": "21.0.6",
    "openssh-server": "9.6.0",
    "printer-driver-foo2zjs": "20200505.0.0",
}


def read_resource(name):
    with open(os.path.join(RESOURCES, name), encoding='utf-8') as handle:
        return handle.read()


class TestParseLine:

    def test_record(self):
        assert parse_line("wget 1.20.3") == PackageRecord("wget", "1.20.3")

    def test_carriage_return(self):
        assert parse_line("wget 1.20.3\r") == PackageRecord("wget", "1.20.3")

    @pytest.mark.parametrize("line", [
        "badline",
        "split name 1.0",
        "wget 1.20.3 ",
        " 1.20.3",
        "wget ",
        "wget  1.20.3",
    ])
    def test_malformed(self, line):
        assert parse_line(line) is None


class TestGetPackages:

    def test_simple_package(self):
        packages, steps = get_packages("mycoolpackage 1.2.3\n")

        assert packages.as_dict() == {"mycoolpackage": "1.2.3"}
        assert len(steps) == 1

    def test_epoch_version(self):
        packages, _ = get_packages("mycoolpackage 24:1.2\n")
        assert packages["mycoolpackage"] == PackageVersion(1, 2, 0)

    def test_end_to_end(self):
        packages, _ = get_packages("wget 1.20.3\nacl 2.3.2-1build1.1\n")

        # Suffix stripped three components versions are kept as is
        assert packages.as_dict() == {"wget": "1.20.3", "acl": "2.3.2"}

    def test_real_examples(self):
        packages, steps = get_packages(read_resource('ubuntu-24.04'))

        assert len(packages) == len(UBUNTU_2404)
        assert packages.as_dict() == UBUNTU_2404
        assert len(steps) == 1
        assert "29 package(s)" in steps[0].remarks
        assert "Skipped" not in steps[0].remarks

    def test_malformed_lines_skipped(self):
        logger, backend = recording_logger()

        packages, steps = get_packages(read_resource('malformed'), logger=logger)

        assert packages.as_dict() == {"wget": "1.21.4", "acl": "2.3.2"}
        warnings = backend.levels('warning')
        assert len(warnings) == 2
        assert "line 2: 'badline'" in warnings[0]
        assert "'split name 1.0'" in warnings[1]
        assert "Skipped 2 malformed line(s)" in steps[0].remarks

    def test_malformed_line_does_not_stop_parsing(self):
        packages, _ = get_packages("badline\nwget 1.20.3\n")
        assert packages.as_dict() == {"wget": "1.20.3"}

    @pytest.mark.parametrize("separator", ["\r", "\x0b", "\x0c", "\x1c", "\x1e", "\x85", "\u2028", "\u2029"])
    def test_only_line_feed_ends_a_line(self, separator):
        logger, backend = recording_logger()

        packages, steps = get_packages(f"acl 2.3.2{separator}bash 5.2.21\nwget 1.20.3\n", logger=logger)

        assert packages.as_dict() == {"wget": "1.20.3"}
        assert len(backend.levels('warning')) == 1
        assert "Skipped 1 malformed line(s)" in steps[0].remarks

    def test_duplicate_last_wins(self):
        logger, backend = recording_logger()

        packages, _ = get_packages("wget 1.20.3\nwget 1:1.21.4-1\n", logger=logger)

        assert packages.as_dict() == {"wget": "1.21.4"}
        assert any("Duplicate package wget" in m for m in backend.levels('debug'))

    def test_keeps_listing_order(self):
        packages, _ = get_packages("zlib1g 1:1.3\nacl 2.3.2\nbash 5.2.21-2ubuntu4\n")
        assert list(packages) == ["zlib1g", "acl", "bash"]

    @pytest.mark.parametrize("output", ["", "\n\n", None])
    def test_empty(self, output):
        packages, steps = get_packages(output)

        assert len(packages) == 0
        assert "0 package(s)" in steps[0].remarks

    def test_all_values_canonical(self):
        packages, _ = get_packages(read_resource('ubuntu-24.04') + "odd ~\nweird :x.y\n")
        for version in packages.as_dict().values():
            assert version.count('.') == 2
            assert all(part.isdigit() for part in version.split('.'))


class TestPackageVersionMap:

    def test_read_only(self):
        packages = PackageVersionMap({"wget": PackageVersion(1, 20, 3)})

        with pytest.raises(TypeError):
            packages["wget"] = PackageVersion(1, 0, 0)
        assert "wget" in packages
        assert packages.get("curl") is None

    def test_copy_of_input(self):
        versions = {"wget": PackageVersion(1, 20, 3)}
        packages = PackageVersionMap(versions)
        versions["curl"] = PackageVersion(8, 5, 0)

        assert "curl" not in packages
