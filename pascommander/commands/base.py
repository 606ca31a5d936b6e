#  ___  _   ___
# | _ \/_\ / __|
# |  _/ _ \\__ \
# |_|/_/ \_\___/
#
# PAS Commander
# Copyright 2026 PAS Commander contributors
#

import abc
import argparse
import csv
import datetime
import io
import logging
import os
import shlex
from collections import OrderedDict
from typing import Optional, Sequence, List, Any, Dict

from tabulate import tabulate

from ..error import CommandError
from ..params import PasParams

aliases = {}                 # type: Dict[str, str]
commands = {}                # type: Dict[str, Command]
command_info = OrderedDict()


json_output_parser = argparse.ArgumentParser(add_help=False)
json_output_parser.add_argument('--format', dest='format', action='store', choices=['table', 'json'],
                                default='table', help='format of output')
json_output_parser.add_argument('--output', dest='output', action='store',
                                help='path to resulting output file (ignored for "table" format)')


report_output_parser = argparse.ArgumentParser(add_help=False)
report_output_parser.add_argument('--format', dest='format', action='store', choices=['table', 'csv', 'json'],
                                  default='table', help='format of output')
report_output_parser.add_argument('--output', dest='output', action='store',
                                  help='path to resulting output file (ignored for "table" format)')


class ParseError(Exception):
    pass


def register_commands(commands, aliases, command_info):
    from .account import register_commands as account_commands, register_command_info as account_command_info
    account_commands(commands)
    account_command_info(aliases, command_info)

    from .utils import register_commands as misc_commands, register_command_info as misc_command_info
    misc_commands(commands)
    misc_command_info(aliases, command_info)


def raise_parse_exception(m):
    raise ParseError(m)


def suppress_exit(*args):
    raise ParseError()


def json_serialized(obj):
    if isinstance(obj, (datetime.datetime, datetime.date)):
        return obj.isoformat()
    return str(obj)


def write_report(report, filename, default_ext):   # type: (str, Optional[str], str) -> Optional[str]
    if not filename:
        return report
    _, ext = os.path.splitext(filename)
    if not ext:
        filename += default_ext
    logging.info('Report path: %s', os.path.abspath(filename))
    with open(filename, 'w', encoding='utf-8') as fd:
        fd.write(report)
    return None


def dump_report_data(data, headers, fmt='', filename=None, **kwargs):
    # type: (List[List], Sequence[str], Optional[str], Optional[str], ...) -> Optional[str]
    # kwargs:
    #           row_number: boolean        - Add row number. table only
    #           no_header: boolean         - Do not print header

    if fmt == 'csv':
        with io.StringIO() as fd:
            csv_writer = csv.writer(fd)
            if headers:
                csv_writer.writerow(headers)
            for row in data:
                csv_writer.writerow(['\n'.join(str(x) for x in c) if isinstance(c, list) else c for c in row])
            return write_report(fd.getvalue(), filename, '.csv')

    row_number = kwargs.get('row_number') is True
    if row_number and headers:
        headers = ['#'] + list(headers)

    expanded_data = []
    for row_no, row in enumerate(data):
        row = list(row)
        if row_number:
            row.insert(0, row_no + 1)
        expanded_rows = max((len(x) for x in row if isinstance(x, list)), default=1)
        for i in range(expanded_rows):
            rowi = []
            for column in row:
                value = ''
                if isinstance(column, list):
                    if i < len(column):
                        value = column[i]
                elif i == 0:
                    value = column
                rowi.append(value)
            expanded_data.append(rowi)

    tablefmt = 'simple'
    if kwargs.get('no_header'):
        headers = ()
        tablefmt = 'plain'

    print(tabulate(expanded_data, headers=headers, tablefmt=tablefmt))
    return None


class CliCommand(abc.ABC):
    @abc.abstractmethod
    def execute_args(self, params, args, **kwargs):   # type: (PasParams, str, ...) -> Any
        pass


class Command(CliCommand):
    def execute(self, params, **kwargs):     # type: (PasParams, Any) -> Any
        raise NotImplementedError()

    def execute_args(self, params, args, **kwargs):
        # type: (PasParams, str, ...) -> Any
        try:
            d = {}
            d.update(kwargs)
            parser = self._get_parser_safe()
            args = '' if args is None else args
            if parser:
                opts = parser.parse_args(shlex.split(args))
                d.update(opts.__dict__)

            return self.execute(params, **d)
        except ParseError as e:
            if e.args and e.args[0]:
                raise CommandError(kwargs.get('command') or '', str(e.args[0]))

    def get_parser(self):   # type: () -> Optional[argparse.ArgumentParser]
        return None

    def _ensure_parser(func):
        def _wrapper(self):
            parser = func(self)
            if parser:
                if parser.exit != suppress_exit:
                    parser.exit = suppress_exit
                if parser.error != raise_parse_exception:
                    parser.error = raise_parse_exception
            return parser
        return _wrapper

    @_ensure_parser
    def _get_parser_safe(self):
        return self.get_parser()
    _ensure_parser = staticmethod(_ensure_parser)
