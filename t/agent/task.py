#!/usr/bin/env python3
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'lib'))

from AptVersions.Config import Config
from AptVersions.Errors import CollectionError
from AptVersions.Packages.Collector import (
    CommandSource, DpkgQuerySource, FileSource, PackageSource, StringSource,
)
from AptVersions.Task import AptVersionTask


class SwitchableSource(PackageSource):

    def __init__(self, listing):
        self.listing = listing
        self.fail = False

    def read_listing(self, logger=None):
        if self.fail:
            raise CollectionError("dpkg database locked", status=2)
        return self.listing


class TestAptVersionTask:

    def test_prepare_stores_package_versions(self):
        task = AptVersionTask(source=StringSource("wget 1.20.3\n"))

        packages = task.prepare()

        assert "wget" in packages
        assert task.packages is packages
        assert task.data_context() == {"apt_version": {"wget": "1.20.3"}}

    def test_data_key(self):
        config = Config(options={'data-key': 'packages'})
        task = AptVersionTask(config=config, source=StringSource("wget 1.19.2\n"))
        task.prepare()

        assert task.data_context() == {"packages": {"wget": "1.19.2"}}

    def test_data_context_requires_prepare(self):
        task = AptVersionTask(source=StringSource("wget 1.20.3\n"))
        with pytest.raises(RuntimeError):
            task.data_context()

    def test_failure_drops_previous_result(self):
        source = SwitchableSource("wget 1.20.3\n")
        task = AptVersionTask(source=source)
        task.prepare()

        source.fail = True
        with pytest.raises(CollectionError):
            task.prepare()

        assert task.packages is None
        assert task.steps() == []
        with pytest.raises(RuntimeError):
            task.data_context()

    def test_fresh_map_per_cycle(self):
        source = SwitchableSource("wget 1.20.3\n")
        task = AptVersionTask(source=source)
        first = task.prepare()

        source.listing = "curl 8.5.0-2ubuntu10.6\n"
        second = task.prepare()

        assert first.as_dict() == {"wget": "1.20.3"}
        assert second.as_dict() == {"curl": "8.5.0"}

    def test_result(self):
        task = AptVersionTask(source=StringSource("wget 1.20.3\n"))
        task.prepare()

        result = task.result()
        assert result['data'] == {"apt_version": {"wget": "1.20.3"}}
        assert [step['title'] for step in result['steps']] == [
            "Collect installed packages",
            "Normalize package versions",
        ]
        assert "1 package(s)" in result['steps'][1]['remarks']
        assert 'steps' not in task.result(with_steps=False)


class TestSourceSelection:

    def test_default_is_dpkg_query(self):
        source = AptVersionTask.get_source(Config())
        assert isinstance(source, DpkgQuerySource)
        assert source.timeout == 60

    def test_command(self):
        source = AptVersionTask.get_source(Config(options={'command': 'cat list', 'timeout': '5'}))
        assert isinstance(source, CommandSource)
        assert not isinstance(source, DpkgQuerySource)
        assert source.command == 'cat list'
        assert source.timeout == 5

    def test_listing_file_wins(self, tmp_path):
        listing = tmp_path / "listing"
        config = Config(options={'command': 'cat list', 'listing-file': str(listing)})
        source = AptVersionTask.get_source(config)
        assert isinstance(source, FileSource)
        assert source.path == str(listing.resolve())

    def test_is_enabled(self, monkeypatch):
        from AptVersions.Packages import Collector
        monkeypatch.setattr(Collector, 'can_run', lambda binary: False)

        assert not AptVersionTask().isEnabled()
        assert AptVersionTask(source=StringSource("")).isEnabled()
