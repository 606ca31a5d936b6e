#  ___  _   ___
# | _ \/_\ / __|
# |  _/ _ \\__ \
# |_|/_/ \_\___/
#
# PAS Commander
# Copyright 2026 PAS Commander contributors
#

import argparse
import json
import os
import sys

from .base import Command, dump_report_data, json_output_parser, json_serialized, write_report
from .. import __version__, versioning
from ..display import bcolors, highlight


def register_commands(commands):
    commands['server-info'] = ServerInfoCommand()
    commands['version'] = VersionCommand()


def register_command_info(aliases, command_info):
    aliases['v'] = 'version'
    for p in [server_info_parser, version_parser]:
        command_info[p.prog] = p.description


server_info_parser = argparse.ArgumentParser(prog='server-info', parents=[json_output_parser],
                                             description='Display PVWA server information')
server_info_parser.add_argument('--refresh', dest='refresh', action='store_true',
                                help='read the server information again')

version_parser = argparse.ArgumentParser(prog='version', description='Display version details')
version_parser.add_argument('-v', '--verbose', dest='verbose', action='store_true', help='verbose output')


class ServerInfoCommand(Command):
    def get_parser(self):
        return server_info_parser

    def execute(self, params, **kwargs):
        if kwargs.get('refresh') or params.server_info is None:
            versioning.load_server_version(params, timeout=params.timeout)
        server_info = params.server_info or {}

        if kwargs.get('format') == 'json':
            report = json.dumps(server_info, indent=2, default=json_serialized)
            return write_report(report, kwargs.get('output'), '.json')

        table = [[key, value] for key, value in server_info.items() if not isinstance(value, (dict, list))]
        return dump_report_data(table, ['Property', 'Value'])


class VersionCommand(Command):
    def get_parser(self):
        return version_parser

    def execute(self, params, **kwargs):
        server_version = params.external_version or highlight('unknown', bcolors.WARNING)
        if not kwargs.get('verbose'):
            print('{0}: {1}'.format('Commander Version', __version__))
            print('{0}: {1}'.format('PVWA Version', server_version))
        else:
            print('{0:>20s}: {1}'.format('Commander Version', __version__))
            print('{0:>20s}: {1}'.format('PVWA Version', server_version))
            print('{0:>20s}: {1}'.format('PVWA Address', params.rest_context.server_base))
            print('{0:>20s}: {1}'.format('Python Version', sys.version.replace('\n', '')))
            print('{0:>20s}: {1}'.format('Working directory', os.getcwd()))
            print('{0:>20s}: {1}'.format('Config. File', params.config_filename))
