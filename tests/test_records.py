"""Tests for logtree.records module."""
import dataclasses
import os
import threading

import pytest

from logtree.levels import ERROR, INFO
from logtree.records import RESERVED_ATTRS, LogRecord, make_record


def _record(**kwargs):
    params = {
        'name': 'test', 'level': INFO, 'pathname': '/tmp/app/module.py',
        'lineno': 10, 'msg': 'Test message', 'args': (), 'exc_info': None,
    }
    params.update(kwargs)
    return make_record(**params)


class TestMakeRecord:

    def test_fields(self):
        """Test the factory copies call data into the record."""
        record = _record(func='handler', sinfo='stack')
        assert record.name == 'test'
        assert record.levelno == INFO
        assert record.lineno == 10
        assert record.msg == 'Test message'
        assert record.func_name == 'handler'
        assert record.stack_info == 'stack'

    def test_identity_fields(self):
        """Test thread and process identity are captured."""
        record = _record()
        assert record.thread == threading.get_ident()
        assert record.thread_name == threading.current_thread().name
        assert record.process == os.getpid()
        assert record.created > 0

    def test_extra_merged(self):
        """Test extra keys are readable on the record."""
        record = _record(extra={'user': 'alice', 'ip': '10.0.0.1'})
        assert record.extra == {'user': 'alice', 'ip': '10.0.0.1'}
        assert record.user == 'alice'
        assert record.ip == '10.0.0.1'

    def test_extra_is_copied(self):
        """Test mutating the caller's dict does not change the record."""
        extra = {'user': 'alice'}
        record = _record(extra=extra)
        extra['user'] = 'bob'
        assert record.user == 'alice'

    @pytest.mark.parametrize('key', ['name', 'msg', 'levelname', 'message', 'asctime', 'lineno'])
    def test_reserved_extra_key_raises(self, key):
        """Test extra keys may not shadow record attributes."""
        assert key in RESERVED_ATTRS
        with pytest.raises(KeyError, match='Attempt to overwrite'):
            _record(extra={key: 'x'})

    def test_no_extra_is_empty_mapping(self):
        record = _record()
        assert dict(record.extra) == {}

    def test_single_mapping_arg_unwrapped(self):
        """Test a lone dict argument feeds %(key)s templates."""
        record = _record(msg='%(a)s-%(b)s', args=({'a': 1, 'b': 2},))
        assert record.get_message() == '1-2'


class TestLogRecord:

    def test_immutable(self):
        """Test records cannot be modified after creation."""
        record = _record()
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.msg = 'changed'

    def test_cannot_add_attributes(self):
        record = _record()
        with pytest.raises((AttributeError, TypeError)):
            record.machine = 'host'

    def test_get_message_applies_args(self):
        record = _record(msg='Hello %s, you are %d', args=('alice', 30))
        assert record.get_message() == 'Hello alice, you are 30'

    def test_get_message_without_args(self):
        record = _record(msg=42)
        assert record.get_message() == '42'

    def test_args_stored_unapplied(self):
        """Test formatting is lazy; the template is kept as given."""
        record = _record(msg='Hello %s', args=('alice',))
        assert record.msg == 'Hello %s'
        assert record.args == ('alice',)

    def test_derived_fields(self):
        record = _record(level=ERROR)
        assert record.levelname == 'ERROR'
        assert record.filename == 'module.py'
        assert record.module == 'module'
        assert 0 <= record.msecs < 1000

    def test_missing_attribute_raises(self):
        record = _record()
        assert not hasattr(record, 'user')
        with pytest.raises(AttributeError):
            record.user

    def test_repr(self):
        record = _record()
        assert repr(record).startswith('<LogRecord: test, 20,')

    def test_direct_construction(self):
        """Test the dataclass can be built without the factory."""
        record = LogRecord('direct', INFO, '', 0, 'msg')
        assert record.args == ()
        assert record.exc_info is None

    def test_default_extra_is_read_only_and_empty(self):
        """Test a record built without extra gets an empty read-only mapping."""
        default = next(f for f in dataclasses.fields(LogRecord) if f.name == 'extra')
        assert default.default is dataclasses.MISSING
        record = LogRecord('direct', INFO, '', 0, 'msg')
        assert dict(record.extra) == {}
        with pytest.raises(TypeError):
            record.extra['k'] = 'v'


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
