#!/usr/bin/env python3
import io
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'lib'))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'lib'))

from AptVersions.Config import Config
from AptVersions.Errors import ConfigError
from AptVersions.Logger import LOG_DEBUG, LOG_DEBUG2, LOG_INFO, Logger
from AptVersions.Logger.Backend import Backend
from AptVersions.Logger.File import File
from AptVersions.Logger.Stderr import Stderr
from recording_backend import RecordingBackend


class TestLogger:

    def test_default_backend(self):
        logger = Logger()

        assert len(logger.backends) == 1
        assert isinstance(logger.backends[0], Stderr)
        assert logger.verbosity == LOG_INFO

    @pytest.mark.parametrize("debug,verbosity", [
        (None, LOG_INFO), (0, LOG_INFO), (1, LOG_DEBUG), ('2', LOG_DEBUG2), (True, LOG_DEBUG),
    ])
    def test_debug_level(self, debug, verbosity):
        assert Logger(debug=debug).verbosity == verbosity

    def test_verbosity_filter(self):
        backend = RecordingBackend()
        logger = Logger(debug=1, backends=[backend])

        logger.debug2("hidden")
        logger.debug("shown")
        logger.info("info")
        logger.warning("warning")
        logger.error("error")

        assert [m['level'] for m in backend.messages] == ['debug', 'info', 'warning', 'error']

    def test_prefix_and_trailing_newline(self):
        backend = RecordingBackend()
        logger = Logger(prefix="[apt] ", backends=[backend])

        logger.info("collected\n")

        assert backend.messages == [{'level': 'info', 'message': '[apt] collected'}]

    def test_event_callback_sees_everything(self):
        backend = RecordingBackend()
        logger = Logger(backends=[backend])
        events = []
        logger.register_event_cb(lambda level, message: events.append((level, message)))

        logger.debug2("detail")
        logger.info("summary")

        assert events == [('debug2', 'detail'), ('info', 'summary')]
        assert backend.messages == [{'level': 'info', 'message': 'summary'}]

    def test_debug_result(self):
        backend = RecordingBackend()
        logger = Logger(debug=1, backends=[backend])

        logger.debug_result(action="collection", data=3)
        logger.debug_result(action="collection", data=0)

        assert backend.levels('debug') == ["- collection: success", "- collection: no result"]

    def test_loggers_are_independent(self):
        first = Logger(debug=2, backends=[RecordingBackend()])
        second = Logger()

        assert first.verbosity == LOG_DEBUG2
        assert second.verbosity == LOG_INFO

    def test_from_config(self, tmp_path):
        logfile = tmp_path / "agent.log"
        config = Config(options={'logfile': str(logfile), 'debug': 1})

        logger = Logger(config=config)

        assert [type(b).__name__ for b in logger.backends] == ['Stderr', 'File']
        assert logger.verbosity == LOG_DEBUG

    def test_unknown_backend(self):
        with pytest.raises(ConfigError, match="unknown backend Journal"):
            Logger(logger="Journal")


class TestBackends:

    def test_stderr(self):
        stream = io.StringIO()
        Stderr(stream=stream).add_message('warning', 'line skipped')

        assert stream.getvalue() == "[warning] line skipped\n"

    def test_stderr_color(self):
        stream = io.StringIO()
        Stderr(color=True, stream=stream).add_message('error', 'failed')

        assert stream.getvalue() == "\033[1;31m[error] failed\033[0m\n"

    def test_file(self, tmp_path):
        logfile = tmp_path / "agent.log"
        backend = File(logfile=str(logfile))

        backend.add_message('info', 'first')
        backend.add_message('error', 'second')

        lines = logfile.read_text().splitlines()
        assert len(lines) == 2
        assert lines[0].endswith("[info] first")
        assert lines[1].endswith("[error] second")

    def test_file_maxsize_truncates(self, tmp_path):
        logfile = tmp_path / "agent.log"
        logfile.write_text("x" * (1024 * 1024 + 1))
        backend = File(logfile=str(logfile), logfile_maxsize=1)

        backend.add_message('info', 'fresh')

        assert logfile.read_text().splitlines()[-1].endswith("[info] fresh")
        assert logfile.stat().st_size < 1024

    def test_syslog(self, monkeypatch):
        syslog_module = pytest.importorskip("syslog")
        from AptVersions.Logger import Syslog as module

        sent = []
        monkeypatch.setattr(module.syslog, 'openlog', lambda *args: None)
        monkeypatch.setattr(module.syslog, 'syslog', lambda priority, message: sent.append((priority, message)))

        module.Syslog(logfacility='LOG_DAEMON').add_message('warning', 'skipped')

        assert sent == [(syslog_module.LOG_WARNING, '[warning] skipped')]

    def test_syslog_debug2_uses_debug_priority(self, monkeypatch):
        syslog_module = pytest.importorskip("syslog")
        from AptVersions.Logger import Syslog as module

        sent = []
        monkeypatch.setattr(module.syslog, 'openlog', lambda *args: None)
        monkeypatch.setattr(module.syslog, 'syslog', lambda priority, message: sent.append((priority, message)))

        module.Syslog().add_message('debug2', 'wget: 1.20.3 => 1.20.3')

        assert sent == [(syslog_module.LOG_DEBUG, '[debug2] wget: 1.20.3 => 1.20.3')]

    def test_syslog_unknown_facility(self):
        pytest.importorskip("syslog")
        from AptVersions.Logger.Syslog import Syslog

        with pytest.raises(ConfigError, match="unknown syslog facility LOG_KERNEL"):
            Syslog(logfacility='LOG_KERNEL')

    def test_unknown_level_rejected(self):
        backend = RecordingBackend()

        with pytest.raises(ValueError, match="unknown log level trace"):
            backend.add_message('trace', 'detail')
        assert backend.messages == []

    def test_empty_message_and_default_level(self):
        stream = io.StringIO()
        backend = Stderr(stream=stream)

        backend.add_message('info', '')
        backend.add_message(None, 'collected')

        assert stream.getvalue() == "[info] collected\n"

    def test_debug2_severity(self):
        assert Backend.severity('debug2') == 'debug'
        assert Backend.severity('warning') == 'warning'
