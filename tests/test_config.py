import logging

import pytest

from common.config import CtxLogFormatter, LOG_FORMAT, ctx, options, id_range_callback
from common.const import Environment


@pytest.fixture
def restore_options():
    saved = {name: options[name] for name in ('datacenter', 'worker', 'wait_timeout', 'env')}
    yield
    for name, value in saved.items():
        setattr(options, name, value)


def test_log_context():
    record = logging.LogRecord('snowid', logging.INFO, __file__, 10, 'hello %s', ('world',), None)
    ctx.command = 'gen'
    try:
        text = CtxLogFormatter(fmt=LOG_FORMAT, datefmt='', color=False).format(record)
    finally:
        del ctx.command
    assert "'command': 'gen'" in text
    assert text.endswith('hello world')
    assert text.startswith('[I ')


def test_id_range_callback():
    check = id_range_callback('worker', 32)
    check(0)
    check(31)
    with pytest.raises(ValueError):
        check(32)
    with pytest.raises(ValueError):
        check(-1)


def test_parse_options(restore_options):
    rest = options.parse_command_line(['snowid', '--datacenter=3', '--worker=7', '--wait_timeout=0',
                                       '--env=prod', 'gen'], final=False)
    assert rest == ['gen']
    assert (options.datacenter, options.worker, options.env) == (3, 7, Environment.PROD)

    from common import shared
    g = shared.create_id_generator()
    assert (g.datacenter_id, g.worker_id) == (3, 7)


def test_parse_options_out_of_range(restore_options):
    with pytest.raises(ValueError):
        options.parse_command_line(['snowid', '--worker=32'], final=False)
