#!/usr/bin/env python3
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'lib'))

from AptVersions.Config import DEFAULT, Config
from AptVersions.Errors import ConfigError


class TestConfig:

    def test_defaults(self):
        config = Config()

        assert config['data-key'] == 'apt_version'
        assert config.data_key == 'apt_version'
        assert config['timeout'] == 60
        assert config['logger'] == ['Stderr']
        assert config['command'] is None
        assert DEFAULT['logger'] == 'Stderr'

    def test_options_override_defaults(self):
        config = Config(options={'timeout': '15', 'logger': 'stderr,,syslog', 'debug': None})

        assert config['timeout'] == 15
        assert config['logger'] == ['stderr', 'syslog']
        assert config['debug'] is None

    def test_file(self, tmp_path):
        conf = tmp_path / "agent.cfg"
        conf.write_text(
            "# apt versions agent\n"
            "command = dpkg-query -W -f='${Package} ${Version}\\n'\n"
            "timeout = 30 # seconds\n"
            "data-key = 'apt_version'\n"
            "debug = 1\n"
        )

        config = Config(options={'conf-file': str(conf), 'debug': 2})

        assert config['command'] == "dpkg-query -W -f='${Package} ${Version}\\n'"
        assert config['timeout'] == 30
        assert config['data-key'] == 'apt_version'
        assert config['debug'] == 2

    def test_include(self, tmp_path):
        confd = tmp_path / "conf.d"
        confd.mkdir()
        (confd / "10-timeout.cfg").write_text("timeout = 10\n")
        (confd / "20-timeout.cfg").write_text("timeout = 20\n")
        (confd / "ignored.txt").write_text("timeout = 99\n")
        conf = tmp_path / "agent.cfg"
        conf.write_text("timeout = 5\ninclude conf.d\n")

        config = Config(options={'conf-file': str(conf)})

        assert config['timeout'] == 20

    def test_unknown_directive_warns(self, tmp_path):
        conf = tmp_path / "agent.cfg"
        conf.write_text("server = https://example.com\n")

        with pytest.warns(UserWarning, match="unknown configuration directive server"):
            Config(options={'conf-file': str(conf)})

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="non-existing file"):
            Config(options={'conf-file': str(tmp_path / "missing.cfg")})

    @pytest.mark.parametrize("timeout", ["soon", "0", "-3"])
    def test_invalid_timeout(self, timeout):
        with pytest.raises(ConfigError):
            Config(options={'timeout': timeout})

    def test_file_logger_needs_logfile(self):
        with pytest.raises(ConfigError, match="logfile"):
            Config(options={'logger': 'File'})

    def test_logfile_adds_file_logger(self, tmp_path):
        logfile = tmp_path / "agent.log"
        config = Config(options={'logfile': str(logfile)})

        assert config['logger'] == ['Stderr', 'File']
        assert config['logfile'] == str(logfile.resolve())

    def test_empty_data_key(self):
        with pytest.raises(ConfigError):
            Config(options={'data-key': ''})

    def test_logger_section(self):
        config = Config(options={'debug': 1, 'color': True})

        assert config.logger() == {
            'debug': 1,
            'logger': ['Stderr'],
            'logfacility': 'LOG_USER',
            'logfile': None,
            'logfile-maxsize': None,
            'color': True,
        }

    def test_defaults_must_be_dict(self):
        with pytest.raises(TypeError):
            Config(defaults=['timeout'])
