# -*- coding: utf-8 -*-
"""snowid command line tool.

    snowid [options] <command> [options] [ids]
    python -m id_tool.main [options] <command> [options] [ids]

options given after the ids are rejected.
"""
from id_tool.config import options, command, params
import sys
import logging
from common import shared, const
from common.config import ctx
from snowid import SnowflakeError
from id_tool import commands

_NO_PARAMS = ['gen', 'bench', 'describe']


def run(command: str, params):
    if command == 'gen':
        for text in commands.gen(shared.id_generator, options.count, options.encoding):
            print(text)
    elif command == 'parse':
        for info in commands.parse(params, options.encoding):
            print(info.model_dump_json())
    elif command == 'format':
        for text in commands.format_ids(params, options.encoding):
            print(text)
    elif command == 'bench':
        result = commands.bench(shared.id_generator, options.threads, options.count)
        print(f'threads: {result.threads}, ids: {result.total}, distinct: {result.distinct}, '
              f'seconds: {result.seconds:.3f}, rate: {result.rate:.0f}/s')
        return 0 if result.ok else 1
    elif command == 'describe':
        print(shared.id_generator.describe())
    else:
        logging.error(f'unknown command {command}, choose from {const.COMMANDS}')
        return 2
    return 0


def check_params(command: str, params):
    if misplaced := [p for p in params if p.startswith('-') and not p[1:].isdigit()]:
        logging.error(f'options must come before ids: {misplaced}')
        return False
    if params and command in _NO_PARAMS:
        logging.error(f'{command} takes no arguments: {params}')
        return False
    return True


def main():
    if command is None:
        options.print_help()
        sys.exit(2)
    ctx.command = command
    if not check_params(command, params):
        sys.exit(2)
    try:
        code = run(command, params)
    except SnowflakeError:
        logging.exception(f'{command} failed')
        code = 1
    sys.exit(code)


if __name__ == '__main__':
    main()
