"""Unit tests for logging setup."""
import json
import logging
import sys

from waste_manager.logger import QUIET_LOGGERS, JSONFormatter, build_logging_config


def make_record(**extra):
    record = logging.LogRecord(
        name='waste_manager.aggregator',
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg='Found %d resources',
        args=(3,),
        exc_info=None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestBuildLoggingConfig:
    def test_level_and_format(self):
        config = build_logging_config('DEBUG', 'json')

        assert config['handlers']['console']['formatter'] == 'json'
        assert config['handlers']['console']['stream'] == 'ext://sys.stderr'
        assert config['loggers']['waste_manager']['level'] == 'DEBUG'

    def test_sdk_loggers_held_at_warning(self):
        config = build_logging_config('DEBUG')

        for name in QUIET_LOGGERS:
            assert config['loggers'][name]['level'] == 'WARNING'
        assert 'httpx' in QUIET_LOGGERS


class TestJSONFormatter:
    def test_core_fields(self):
        entry = json.loads(JSONFormatter().format(make_record()))

        assert entry['level'] == 'INFO'
        assert entry['logger'] == 'waste_manager.aggregator'
        assert entry['message'] == 'Found 3 resources'
        assert 'msg' not in entry
        assert 'args' not in entry

    def test_extra_fields_copied(self):
        record = make_record(source='VOLUME', resource_count=3, duration=0.25)

        entry = json.loads(JSONFormatter().format(record))

        assert entry['source'] == 'VOLUME'
        assert entry['resource_count'] == 3
        assert entry['duration'] == 0.25

    def test_exception_included(self):
        try:
            raise ValueError('bad payload')
        except ValueError:
            record = make_record()
            record.exc_info = sys.exc_info()

        entry = json.loads(JSONFormatter().format(record))

        assert 'ValueError: bad payload' in entry['exception']
