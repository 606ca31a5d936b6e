#  ___  _   ___
# | _ \/_\ / __|
# |  _/ _ \\__ \
# |_|/_/ \_\___/
#
# PAS Commander
# Copyright 2026 PAS Commander contributors
#

"""Privileged account lookup against the PVWA REST API.

Three request shapes share one entry point, :func:`get_accounts`:

* :class:`AccountLookup` reads one account by ID from the v10 ``api/Accounts/{id}`` endpoint.
* :class:`AccountQuery` searches the v10 ``api/Accounts`` collection and follows ``nextLink``
  until the server stops returning one.
* :class:`LegacyAccountQuery` searches the classic ``PIMServices.svc`` endpoint, which returns
  a single account with its properties as key/value arrays.
"""

import logging
import re
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union
from urllib.parse import quote, urlencode

from . import rest_api
from .error import CommandError
from .params import PasParams
from .versioning import assert_version_requirement

ACCOUNTS_ENDPOINT = 'api/Accounts'
LEGACY_ACCOUNTS_ENDPOINT = 'WebServices/PIMServices.svc/Accounts'

ACCOUNT_TYPE = 'CyberArk.Vault.Account.V10'
LEGACY_ACCOUNT_TYPE = 'CyberArk.Vault.Account'

MINIMUM_VERSION = '10.4'
SEARCH_TYPE_MINIMUM_VERSION = '10.5'

SEARCH_TYPES = ('startswith', 'contains')
MAX_SORT_TERMS = 3
MIN_LIMIT = 1
MAX_LIMIT = 1000
MAX_KEYWORDS_LENGTH = 500
MAX_SAFE_NAME_LENGTH = 28

LEGACY_RESERVED_FIELDS = ('AccountID', 'InternalProperties')

sort_term_pattern = re.compile(r'^[^\s,]+(\s+(asc|desc))?$', re.IGNORECASE)


@dataclass(frozen=True)
class AccountLookup:
    account_id: str


@dataclass(frozen=True)
class AccountQuery:
    search: Optional[str] = None
    search_type: Optional[str] = None
    sort: Sequence[str] = ()
    offset: Optional[int] = None
    limit: Optional[int] = None
    filter: Optional[str] = None


@dataclass(frozen=True)
class LegacyAccountQuery:
    keywords: Optional[str] = None
    safe: Optional[str] = None


AccountRequest = Union[AccountLookup, AccountQuery, LegacyAccountQuery]


class AccountRecord:
    """ Account returned by the vault, tagged with the API generation it came from """

    def __init__(self, type_name, properties):   # type: (str, Dict[str, Any]) -> None
        self.type_name = type_name
        self.properties = properties

    @property
    def account_id(self):   # type: () -> Optional[str]
        if self.type_name == LEGACY_ACCOUNT_TYPE:
            return self.properties.get('AccountID')
        return self.properties.get('id')

    def get(self, key, default=None):
        return self.properties.get(key, default)

    def to_dict(self):   # type: () -> Dict[str, Any]
        result = {'@type': self.type_name}
        result.update(self.properties)
        return result

    def __repr__(self):
        return f'AccountRecord({self.type_name!r}, {self.account_id!r})'


def _sort_terms(sort):   # type: (Union[str, Iterable[str], None]) -> List[str]
    if not sort:
        return []
    if isinstance(sort, str):
        sort = sort.split(',')
    return [x.strip() for x in sort if x and x.strip()]


def _is_unset(value):
    if value is None:
        return True
    if isinstance(value, (str, list, tuple)):
        return len(value) == 0
    return False


def validate_request(query):   # type: (AccountRequest) -> None
    command = 'get-account'
    if isinstance(query, AccountLookup):
        if not query.account_id:
            raise CommandError(command, 'Account ID cannot be empty')
    elif isinstance(query, AccountQuery):
        if query.search_type is not None and query.search_type not in SEARCH_TYPES:
            raise CommandError(command, f'Invalid search type "{query.search_type}". '
                                        f'Supported values: {", ".join(SEARCH_TYPES)}')
        terms = _sort_terms(query.sort)
        if len(terms) > MAX_SORT_TERMS:
            raise CommandError(command, f'At most {MAX_SORT_TERMS} sort terms are allowed')
        for term in terms:
            if not sort_term_pattern.match(term):
                raise CommandError(command, f'Invalid sort term "{term}". Expected "field [asc|desc]"')
        if query.offset is not None and query.offset < 0:
            raise CommandError(command, 'Offset cannot be negative')
        if query.limit is not None and not (MIN_LIMIT <= query.limit <= MAX_LIMIT):
            raise CommandError(command, f'Limit must be between {MIN_LIMIT} and {MAX_LIMIT}')
    elif isinstance(query, LegacyAccountQuery):
        if query.keywords and len(query.keywords) > MAX_KEYWORDS_LENGTH:
            raise CommandError(command, f'Keywords cannot be longer than {MAX_KEYWORDS_LENGTH} characters')
        if query.safe and len(query.safe) > MAX_SAFE_NAME_LENGTH:
            raise CommandError(command, f'Safe name cannot be longer than {MAX_SAFE_NAME_LENGTH} characters')
    else:
        raise TypeError(f'Unsupported account request: {type(query).__name__}')


def required_version(query):   # type: (AccountRequest) -> Optional[str]
    if isinstance(query, AccountQuery) and query.search_type is not None:
        return SEARCH_TYPE_MINIMUM_VERSION
    if isinstance(query, (AccountLookup, AccountQuery)):
        return MINIMUM_VERSION
    return None


def project_query_parameters(query):   # type: (AccountRequest) -> Dict[str, Any]
    parameters = OrderedDict()    # type: Dict[str, Any]
    if isinstance(query, AccountQuery):
        parameters['search'] = query.search
        parameters['searchType'] = query.search_type
        parameters['sort'] = ','.join(_sort_terms(query.sort))
        parameters['offset'] = query.offset
        parameters['limit'] = query.limit
        parameters['filter'] = query.filter
    elif isinstance(query, LegacyAccountQuery):
        parameters['Keywords'] = query.keywords
        parameters['Safe'] = query.safe
    return OrderedDict((k, v) for k, v in parameters.items() if not _is_unset(v))


def encode_query_string(parameters):   # type: (Dict[str, Any]) -> str
    if not parameters:
        return ''
    return urlencode(parameters, quote_via=quote)


def walk_next_links(params, response, timeout=None):
    # type: (PasParams, Dict[str, Any], Optional[float]) -> List[Dict[str, Any]]
    accounts = list(response.get('value') or [])
    next_link = response.get('nextLink')
    page = 1
    while next_link:
        page += 1
        url = params.rest_context.resolve_url(next_link)
        logging.debug('Loading accounts page %d: %s', page, url)
        response = rest_api.invoke_rest(params.rest_context, url, timeout=timeout) or {}
        accounts.extend(response.get('value') or [])
        next_link = response.get('nextLink')
    return accounts


def _get_any(obj, *names):
    for name in names:
        if name in obj:
            return obj[name]
    return None


def property_pairs_to_dict(pairs):   # type: (Optional[Iterable[dict]]) -> Dict[str, Any]
    properties = OrderedDict()    # type: Dict[str, Any]
    for pair in pairs or []:
        key = _get_any(pair, 'Key', 'key')
        if key is None:
            continue
        properties[key] = _get_any(pair, 'Value', 'value')
    return properties


def normalize_legacy_response(response):   # type: (Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]
    if not response:
        return None
    accounts = _get_any(response, 'accounts', 'Accounts') or []
    count = _get_any(response, 'count', 'Count')
    if count is None:
        count = len(accounts)
    if count == 0 or len(accounts) == 0:
        return None
    if count > 1:
        logging.warning('%d accounts found. Only the first result is returned', count)

    account = accounts[0]
    record = OrderedDict()    # type: Dict[str, Any]
    record['AccountID'] = _get_any(account, 'AccountID', 'AccountId')
    for key, value in property_pairs_to_dict(_get_any(account, 'Properties', 'properties')).items():
        if key in LEGACY_RESERVED_FIELDS:
            logging.debug('Account property "%s" is ignored', key)
            continue
        record[key] = value
    record['InternalProperties'] = property_pairs_to_dict(
        _get_any(account, 'InternalProperties', 'internalProperties'))
    return record


def tag_record(properties, type_name):   # type: (Dict[str, Any], str) -> AccountRecord
    return AccountRecord(type_name, properties)


def get_accounts(params, query, timeout=None):
    # type: (PasParams, AccountRequest, Optional[float]) -> List[AccountRecord]
    validate_request(query)

    version = required_version(query)
    if version:
        assert_version_requirement(params, version)

    context = params.rest_context
    query_string = encode_query_string(project_query_parameters(query))

    if isinstance(query, AccountLookup):
        url = rest_api.build_url(context, f'{ACCOUNTS_ENDPOINT}/{quote(query.account_id, safe="")}')
        response = rest_api.invoke_rest(context, url, timeout=timeout)
        if not response:
            return []
        return [tag_record(response, ACCOUNT_TYPE)]

    if isinstance(query, AccountQuery):
        url = rest_api.build_url(context, ACCOUNTS_ENDPOINT, query_string)
        response = rest_api.invoke_rest(context, url, timeout=timeout)
        if not response:
            return []
        accounts = walk_next_links(params, response, timeout=timeout)
        logging.debug('%d accounts loaded', len(accounts))
        return [tag_record(x, ACCOUNT_TYPE) for x in accounts]

    url = rest_api.build_url(context, LEGACY_ACCOUNTS_ENDPOINT, query_string)
    response = rest_api.invoke_rest(context, url, timeout=timeout)
    record = normalize_legacy_response(response)
    if record is None:
        return []
    return [tag_record(record, LEGACY_ACCOUNT_TYPE)]
