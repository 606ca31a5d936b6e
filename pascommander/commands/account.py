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
import logging

from .base import Command, dump_report_data, json_serialized, write_report, report_output_parser
from .. import accounts, versioning
from ..error import CommandError


def register_commands(commands):
    commands['get-account'] = GetAccountCommand()


def register_command_info(aliases, command_info):
    aliases['ga'] = 'get-account'
    command_info[get_account_parser.prog] = get_account_parser.description


get_account_parser = argparse.ArgumentParser(prog='get-account', parents=[report_output_parser],
                                             description='Find privileged accounts in the vault')
get_account_parser.add_argument('--timeout', dest='timeout', action='store', type=float,
                                help='request timeout in seconds')
lookup_group = get_account_parser.add_argument_group('Account lookup')
lookup_group.add_argument('--id', dest='account_id', action='store', help='account ID')
query_group = get_account_parser.add_argument_group('Account query (PVWA 10.4+)')
query_group.add_argument('--search', dest='search', action='store', help='search keywords, separated by space')
query_group.add_argument('--search-type', dest='search_type', action='store', choices=accounts.SEARCH_TYPES,
                         help='search keywords that start with or contain the value (PVWA 10.5+)')
query_group.add_argument('--sort', dest='sort', action='append', metavar='"FIELD [asc|desc]"',
                         help=f'sort order. Can be repeated up to {accounts.MAX_SORT_TERMS} times')
query_group.add_argument('--offset', dest='offset', action='store', type=int,
                         help='number of accounts to skip')
query_group.add_argument('--limit', dest='limit', action='store', type=int,
                         help=f'page size, {accounts.MIN_LIMIT} to {accounts.MAX_LIMIT}')
query_group.add_argument('--filter', dest='filter', action='store',
                         help='filter expression, for example "safeName eq \'Linux\'"')
legacy_group = get_account_parser.add_argument_group('Legacy search')
legacy_group.add_argument('--keywords', dest='keywords', action='store',
                          help='keywords to search for, separated by space')
legacy_group.add_argument('--safe', dest='safe', action='store', help='safe to search in')


LOOKUP_OPTIONS = ('account_id',)
QUERY_OPTIONS = ('search', 'search_type', 'sort', 'offset', 'limit', 'filter')
LEGACY_OPTIONS = ('keywords', 'safe')

ACCOUNT_COLUMNS = ('id', 'name', 'safeName', 'userName', 'address', 'platformId')
LEGACY_ACCOUNT_COLUMNS = ('AccountID', 'Safe', 'Folder', 'Name', 'UserName', 'Address', 'PolicyID')


def build_account_request(**kwargs):   # type: (...) -> accounts.AccountRequest
    def is_set(name):
        return kwargs.get(name) is not None

    modes = []
    if any(is_set(x) for x in LOOKUP_OPTIONS):
        modes.append('lookup')
    if any(is_set(x) for x in QUERY_OPTIONS):
        modes.append('query')
    if any(is_set(x) for x in LEGACY_OPTIONS):
        modes.append('legacy')
    if len(modes) > 1:
        raise CommandError('get-account', '"--id", query options and legacy search options cannot be combined')

    mode = modes[0] if modes else 'query'
    if mode == 'lookup':
        return accounts.AccountLookup(account_id=kwargs['account_id'])
    if mode == 'legacy':
        return accounts.LegacyAccountQuery(keywords=kwargs.get('keywords'), safe=kwargs.get('safe'))
    return accounts.AccountQuery(search=kwargs.get('search'), search_type=kwargs.get('search_type'),
                                 sort=tuple(kwargs.get('sort') or ()), offset=kwargs.get('offset'),
                                 limit=kwargs.get('limit'), filter=kwargs.get('filter'))


class GetAccountCommand(Command):
    def get_parser(self):
        return get_account_parser

    def execute(self, params, **kwargs):
        query = build_account_request(**kwargs)
        accounts.validate_request(query)
        timeout = kwargs.get('timeout')
        if timeout is None:
            timeout = params.timeout
        if accounts.required_version(query):
            versioning.ensure_server_version(params, timeout=timeout)
        records = accounts.get_accounts(params, query, timeout=timeout)

        fmt = kwargs.get('format')
        if fmt == 'json':
            report = json.dumps([x.to_dict() for x in records], indent=2, default=json_serialized)
            return write_report(report, kwargs.get('output'), '.json')

        if not records:
            logging.info('No accounts found')
            return

        columns = LEGACY_ACCOUNT_COLUMNS if isinstance(query, accounts.LegacyAccountQuery) else ACCOUNT_COLUMNS
        table = [[x.get(c) for c in columns] for x in records]
        return dump_report_data(table, columns, fmt=fmt, filename=kwargs.get('output'), row_number=fmt != 'csv')
