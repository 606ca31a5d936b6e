# -*- coding: utf-8 -*-
#  ___  _   ___
# | _ \/_\ / __|
# |  _/ _ \\__ \
# |_|/_/ \_\___/
#
# PAS Commander
# Copyright 2026 PAS Commander contributors
#


import argparse
from typing import Optional

import certifi
import json
import logging
import os
import shlex
import sys
from pathlib import Path

from . import __version__
from . import cli
from .params import PasParams

def get_params_from_config(config_filename=None):    # type: (Optional[str]) -> PasParams

    def get_env_config():
        path = os.getenv('PAS_CONFIG_FILE')
        if path:
            logging.debug(f'Setting config file from PAS_CONFIG_FILE env variable {path}')
        return path

    def get_default_path():
        default_path = Path.home().joinpath('.pas')
        default_path.mkdir(parents=True, exist_ok=True)
        return default_path

    config_filename = config_filename or get_env_config()
    if not config_filename:
        config_filename = 'config.json'
        if not os.path.isfile(config_filename):
            config_filename = os.path.join(get_default_path(), config_filename)
        else:
            config_filename = os.path.join(os.getcwd(), config_filename)
    else:
        config_filename = os.path.expanduser(config_filename)

    params = PasParams()
    params.config_filename = config_filename
    if os.path.exists(config_filename):
        try:
            with open(params.config_filename) as config_file:
                try:
                    params.config = json.load(config_file)
                except ValueError as e:
                    logging.error('Unable to parse JSON configuration file "%s"', os.path.abspath(params.config_filename))
                    raise e
        except IOError as ioe:
            logging.warning('Error: Unable to open config file %s: %s', params.config_filename, ioe)

    load_config_properties(params)
    if os.getenv('PAS_COMMANDER_DEBUG'):
        params.debug = True
        logging.getLogger().setLevel(logging.DEBUG)
        logging.info('Debug ON')
    session_token = os.getenv('PAS_SESSION_TOKEN')
    if session_token:
        params.session_token = session_token
    return params


def load_config_properties(params):    # type: (PasParams) -> None
    config = params.config
    if config.get('server'):
        params.server = config['server']
    if config.get('session_token'):
        params.session_token = config['session_token']
    if config.get('external_version'):
        params.external_version = str(config['external_version'])
    if config.get('timeout'):
        params.timeout = float(config['timeout'])
    if 'certificate_check' in config:
        params.rest_context.certificate_check = config['certificate_check'] is True
    if config.get('proxy'):
        params.proxy = config['proxy']
    if config.get('debug') is True:
        params.debug = True
    if config.get('commands'):
        params.commands.extend(config['commands'])


def usage(m):
    print(m)
    parser.print_help()
    cli.display_command_help()
    sys.exit(1)


parser = argparse.ArgumentParser(prog='pas-commander', add_help=False, allow_abbrev=False)
parser.add_argument('--server', '-ps', dest='server', action='store', help='PVWA host address.')
parser.add_argument('--session-token', dest='session_token', action='store',
                    help='Authorization token of an established PVWA session.')
parser.add_argument('--version', dest='version', action='store_true', help='Display version')
parser.add_argument('--config', dest='config', action='store', help='Config file to use')
parser.add_argument('--debug', dest='debug', action='store_true', help='Turn on debug mode')
parser.add_argument('--proxy', dest='proxy', action='store', help='Proxy server')
parser.add_argument('--timeout', dest='timeout', action='store', type=float, help='Request timeout in seconds')
parser.add_argument('command', nargs='?', type=str, action='store', help='Command')
parser.add_argument('options', nargs=argparse.REMAINDER, help='Command options')
parser.error = usage


def main():
    os.environ['SSL_CERT_FILE'] = certifi.where()
    logging.basicConfig(format='%(message)s')

    opts, flags = parser.parse_known_args(sys.argv[1:])

    params = get_params_from_config(opts.config)

    if opts.debug:
        params.debug = opts.debug

    logging.getLogger().setLevel(logging.DEBUG if params.debug else logging.INFO)

    if opts.proxy:
        params.proxy = opts.proxy

    if opts.server:
        params.server = opts.server

    if opts.session_token:
        params.session_token = opts.session_token

    if opts.timeout:
        params.timeout = opts.timeout

    if opts.version:
        print(f'PAS Commander, version {__version__}')
        return

    if flags:
        if flags[0] in ('-h', '--help'):
            opts.command = '?'
        else:
            usage(f'Unrecognized arguments: {" ".join(flags)}')
    elif opts.command == 'help' and not opts.options:
        opts.command = '?'
    if (opts.command or '') == '?':
        usage('')

    if opts.command and os.path.isfile(opts.command):
        with open(opts.command, 'r') as f:
            lines = f.readlines()
            params.commands.extend([x.strip() for x in lines if x.strip() and not x.strip().startswith('#')])
    elif opts.command:
        options = ' '.join([shlex.quote(x) for x in opts.options or []])
        params.commands.append(' '.join([opts.command, options]).strip())

    if not params.commands:
        usage('')

    try:
        errno = cli.runcommands(params)
    finally:
        params.rest_context.close()

    sys.exit(errno)


if __name__ == '__main__':
    main()
