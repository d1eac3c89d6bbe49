# -*- coding: utf-8 -*-
import logging
from tornado.log import LogFormatter
from tornado.options import define, parse_config_file
from tornado.options import options
from concurrent_log_handler import ConcurrentRotatingFileHandler
from snowid import snowflake
from .const import Environment
from gevent.local import local

ctx = local()


class CtxLogFormatter(LogFormatter):
    def format(self, record) -> str:
        record.context = ctx.__dict__ or '\b'
        return super().format(record)


LOG_FORMAT = '%(color)s[%(levelname)1.1s %(asctime)s %(module)s:%(funcName)s:%(lineno)d %(process)d]%(end_color)s ' \
             '%(context)s %(message)s'


def parse_callback():
    if options.log_file:
        channel = ConcurrentRotatingFileHandler(filename=options.log_file, maxBytes=options.log_file_max_size,
                                                backupCount=options.log_file_num_backups, encoding='utf-8')
    else:
        channel = logging.StreamHandler()
    channel.setFormatter(CtxLogFormatter(fmt=LOG_FORMAT, datefmt='', color=not options.log_file))
    logger = logging.getLogger()
    logger.addHandler(channel)


def id_range_callback(name: str, upperbound: int):
    def callback(value: int):
        if not (0 <= value < upperbound):
            raise ValueError(f'{name} out of range: {value} not in [0, {upperbound - 1}]')

    return callback


options.log_to_stderr = False
options.add_parse_callback(parse_callback)

define('config', type=str, help='path to config file', callback=lambda path: parse_config_file(path, final=False))
define('app_name', None, str, 'app name')
define('env', Environment.DEV, Environment, 'environment')
define('datacenter', 0, int, 'data center id',
       callback=id_range_callback('datacenter', snowflake.max_datacenter_id))
define('worker', 0, int, 'worker id', callback=id_range_callback('worker', snowflake.max_worker_id))
define('wait_timeout', 1.0, float, 'max seconds to wait for next millisecond when sequence used up, 0 to wait forever')
define('log_file', type=str, help='log file path')
