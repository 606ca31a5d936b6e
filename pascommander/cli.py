#  ___  _   ___
# | _ \/_\ / __|
# |  _/ _ \\__ \
# |_|/_/ \_\___/
#
# PAS Commander
# Copyright 2026 PAS Commander contributors
#

import logging
import sys
from typing import Optional, List

import requests

from .commands import register_commands, aliases, commands, command_info
from .commands.base import dump_report_data
from .display import bcolors
from .error import CommandError, Error
from .params import PasParams

register_commands(commands, aliases, command_info)

SESSIONLESS_COMMANDS = {'version'}


def display_command_help():
    alias_lookup = {x[1]: x[0] for x in aliases.items()}
    print(f'\n{bcolors.BOLD}Commands:{bcolors.ENDC}')
    table = []
    for cmd, description in command_info.items():
        alias = alias_lookup.get(cmd) or ''
        table.append([cmd, alias, description])
    dump_report_data(table, headers=['Command', 'Alias', 'Description'], no_header=True)
    print('')
    print('Type \'command -h\' to display help on command')


def command_and_args_from_cmd(command_line):
    args = ''
    pos = command_line.find(' ')
    if pos > 0:
        cmd = command_line[:pos]
        args = command_line[pos + 1:].strip()
    else:
        cmd = command_line.strip()

    return cmd, args


def establish_session(params):   # type: (PasParams) -> None
    if not params.rest_context.server_base:
        raise CommandError('', 'PVWA server address is not set. Use "--server" option or "server" configuration property')


def do_command(params, command_line):   # type: (PasParams, str) -> Optional[str]
    cmd, args = command_and_args_from_cmd(command_line)
    if not cmd:
        return
    if cmd in aliases and cmd not in commands:
        cmd = aliases[cmd]

    command = commands.get(cmd)
    if not command:
        display_command_help()
        raise CommandError(cmd, 'Unknown command')

    if cmd not in SESSIONLESS_COMMANDS:
        establish_session(params)
    return command.execute_args(params, args, command=cmd)


def runcommands(params, commands=None, quiet=False):   # type: (PasParams, Optional[List[str]], bool) -> int
    if commands is None:
        commands = params.commands

    errno = 0
    for command in commands:
        if not quiet:
            logging.debug('Executing [%s]...', command)
        try:
            result = do_command(params, command)
            if result is not None:
                print(result)
        except CommandError as e:
            errno = 1
            msg = f'{e.command}: {e.message}' if e.command else f'{e.message}'
            logging.error(msg)
        except Error as e:
            errno = 1
            logging.error('Error: %s', e.message)
        except requests.HTTPError as e:
            errno = 1
            logging.error('PVWA request failed: %s', e)
        except requests.RequestException as e:
            errno = 1
            logging.error('Communication Error: %s', e)
        except KeyboardInterrupt:
            errno = 1
            logging.info('Canceled')
            break
        except Exception as e:
            errno = 1
            logging.debug(e, exc_info=True)
            logging.error('An unexpected error occurred: %s', sys.exc_info()[0])
    return errno
