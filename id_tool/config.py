# -*- coding: utf-8 -*-
import sys
from common.config import define, options
from common import const


def encoding_callback(encoding: str):
    if encoding not in const.ENCODINGS:
        raise ValueError(f'unknown encoding {encoding}, choose from {const.ENCODINGS}')


def positive_callback(name: str):
    def callback(value: int):
        if value <= 0:
            raise ValueError(f'{name} must be positive, got {value}')

    return callback


define('count', 1, int, 'ids to generate (per thread for bench)', callback=positive_callback('count'))
define('threads', 4, int, 'native threads for bench', callback=positive_callback('threads'))
define('encoding', 'dec', str, f'id text encoding: {"|".join(const.ENCODINGS)}', callback=encoding_callback)

options.app_name = const.APP_TOOL
# options may come before or after the command: snowid [options] <command> [options] [ids]
command, *params = options.parse_command_line(final=False) or [None]
params = options.parse_command_line([sys.argv[0], *params])
