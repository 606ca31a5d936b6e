from unittest import TestCase, mock
from urllib.parse import parse_qsl, urlparse

import requests

from data_accounts import get_connected_params, modern_account, modern_page, legacy_response
from helper import PasApiHelper
from pascommander import accounts
from pascommander.error import CommandError, UnsupportedVersionError


class TestAccountParameters(TestCase):
    def test_project_modern_query(self):
        query = accounts.AccountQuery(search='root', search_type='contains', sort=('userName', 'address desc'),
                                      offset=0, limit=50, filter="safeName eq 'Linux'")
        parameters = accounts.project_query_parameters(query)
        self.assertEqual(list(parameters.keys()), ['search', 'searchType', 'sort', 'offset', 'limit', 'filter'])
        self.assertEqual(parameters['sort'], 'userName,address desc')
        self.assertEqual(parameters['offset'], 0)
        self.assertNotIn('Keywords', parameters)
        self.assertNotIn('Safe', parameters)

    def test_project_drops_unset_values(self):
        parameters = accounts.project_query_parameters(accounts.AccountQuery(search='', limit=10))
        self.assertEqual(dict(parameters), {'limit': 10})

        parameters = accounts.project_query_parameters(accounts.AccountQuery())
        self.assertEqual(len(parameters), 0)

    def test_project_legacy_query(self):
        parameters = accounts.project_query_parameters(accounts.LegacyAccountQuery(keywords='root 10.0.0.1', safe='Linux'))
        self.assertEqual(list(parameters.items()), [('Keywords', 'root 10.0.0.1'), ('Safe', 'Linux')])

        parameters = accounts.project_query_parameters(accounts.LegacyAccountQuery(safe='Linux'))
        self.assertEqual(list(parameters.items()), [('Safe', 'Linux')])

    def test_project_lookup(self):
        self.assertEqual(len(accounts.project_query_parameters(accounts.AccountLookup('12_3'))), 0)

    def test_encode_round_trip(self):
        query = accounts.AccountQuery(search='admin user & co', sort=('userName asc',),
                                      filter="safeName eq 'Tom & Jerry=1'", limit=25)
        parameters = accounts.project_query_parameters(query)
        query_string = accounts.encode_query_string(parameters)
        self.assertNotIn(' ', query_string)
        self.assertEqual(query_string.count('&'), len(parameters) - 1)
        self.assertEqual(parse_qsl(query_string, keep_blank_values=True),
                         [(k, str(v)) for k, v in parameters.items()])

    def test_encode_empty(self):
        self.assertEqual(accounts.encode_query_string({}), '')

    def test_validation(self):
        invalid = [
            accounts.AccountLookup(''),
            accounts.AccountQuery(search_type='endswith'),
            accounts.AccountQuery(sort=('name', 'userName', 'address', 'safeName')),
            accounts.AccountQuery(sort=('name sideways',)),
            accounts.AccountQuery(offset=-1),
            accounts.AccountQuery(limit=0),
            accounts.AccountQuery(limit=1001),
            accounts.LegacyAccountQuery(keywords='k' * 501),
            accounts.LegacyAccountQuery(safe='s' * 29),
        ]
        for query in invalid:
            with self.assertRaises(CommandError):
                accounts.validate_request(query)

        accounts.validate_request(accounts.AccountQuery(sort='name,userName desc,address ASC', limit=1000))
        accounts.validate_request(accounts.AccountQuery(limit=1))
        accounts.validate_request(accounts.LegacyAccountQuery(keywords='k' * 500, safe='s' * 28))

        with self.assertRaises(TypeError):
            accounts.validate_request({'search': 'root'})


class TestLegacyNormalizer(TestCase):
    def test_flatten_properties(self):
        rs = legacy_response(account_id='19_6', properties={'UserName': 'root', 'Address': '10.0.0.1'},
                             internal_properties={'CreationMethod': 'PVWA'})
        record = accounts.normalize_legacy_response(rs)
        self.assertEqual(record['AccountID'], '19_6')
        self.assertEqual(record['UserName'], 'root')
        self.assertEqual(record['Address'], '10.0.0.1')
        self.assertEqual(record['InternalProperties'], {'CreationMethod': 'PVWA'})

    def test_lower_case_pairs(self):
        rs = {
            'count': 1,
            'accounts': [{
                'AccountID': '20_1',
                'properties': [{'key': 'UserName', 'value': 'admin'}, {'key': 'UserName', 'value': 'Administrator'}],
                'InternalProperties': [{'key': 'CPMStatus', 'value': 'success'}],
            }]
        }
        record = accounts.normalize_legacy_response(rs)
        self.assertEqual(record['AccountID'], '20_1')
        self.assertEqual(record['UserName'], 'Administrator')
        self.assertEqual(record['InternalProperties'], {'CPMStatus': 'success'})

    def test_reserved_fields(self):
        rs = legacy_response(account_id='19_6', properties={'AccountID': 'spoofed', 'UserName': 'root'})
        record = accounts.normalize_legacy_response(rs)
        self.assertEqual(record['AccountID'], '19_6')
        self.assertEqual(record['InternalProperties'], {'CreationMethod': 'PVWA'})

    def test_multiple_matches_warning(self):
        rs = legacy_response(count=3)
        with self.assertLogs(level='WARNING') as logs:
            record = accounts.normalize_legacy_response(rs)
        self.assertIsNotNone(record)
        self.assertEqual(len(logs.output), 1)
        self.assertIn('3', logs.output[0])

    def test_no_matches(self):
        self.assertIsNone(accounts.normalize_legacy_response(legacy_response(count=0)))
        self.assertIsNone(accounts.normalize_legacy_response({'Count': 1, 'accounts': []}))
        self.assertIsNone(accounts.normalize_legacy_response(None))


class TestGetAccounts(TestCase):
    def setUp(self):
        self.invoke_mock = mock.patch('pascommander.rest_api.invoke_rest').start()
        self.invoke_mock.side_effect = PasApiHelper.invoke_rest

    def tearDown(self):
        mock.patch.stopall()

    def test_lookup_by_id(self):
        params = get_connected_params()
        PasApiHelper.invoke_expect([modern_account('12_3')])
        records = accounts.get_accounts(params, accounts.AccountLookup('12_3'), timeout=15)
        self.assertTrue(PasApiHelper.is_expect_empty())
        self.assertEqual(PasApiHelper.requested_urls(), ['https://pvwa.company.com/PasswordVault/api/Accounts/12_3'])
        self.assertEqual(PasApiHelper.timeouts(), [15])
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].type_name, accounts.ACCOUNT_TYPE)
        self.assertEqual(records[0].account_id, '12_3')

    def test_lookup_empty_body(self):
        params = get_connected_params()
        PasApiHelper.invoke_expect([None])
        self.assertEqual(accounts.get_accounts(params, accounts.AccountLookup('12_3')), [])

    def test_pagination(self):
        params = get_connected_params()
        PasApiHelper.invoke_expect([
            modern_page([modern_account('1_1'), modern_account('1_2')], next_link='api/Accounts?offset=2&limit=2', count=5),
            modern_page([modern_account('1_3'), modern_account('1_4')], next_link='api/Accounts?offset=4&limit=2', count=5),
            modern_page([modern_account('1_5')], count=5),
        ])
        records = accounts.get_accounts(params, accounts.AccountQuery(limit=2))
        self.assertTrue(PasApiHelper.is_expect_empty())
        self.assertEqual([x.account_id for x in records], ['1_1', '1_2', '1_3', '1_4', '1_5'])
        self.assertTrue(all(x.type_name == accounts.ACCOUNT_TYPE for x in records))
        self.assertEqual(PasApiHelper.requested_urls(), [
            'https://pvwa.company.com/PasswordVault/api/Accounts?limit=2',
            'https://pvwa.company.com/PasswordVault/api/Accounts?offset=2&limit=2',
            'https://pvwa.company.com/PasswordVault/api/Accounts?offset=4&limit=2',
        ])

    def test_pagination_empty_page(self):
        params = get_connected_params()
        PasApiHelper.invoke_expect([
            modern_page([], next_link='https://pvwa2.company.com/PasswordVault/api/Accounts?offset=100', count=1),
            modern_page([modern_account('2_1')], next_link=None),
        ])
        records = accounts.get_accounts(params, accounts.AccountQuery())
        self.assertEqual([x.account_id for x in records], ['2_1'])
        self.assertEqual(PasApiHelper.requested_urls()[1],
                         'https://pvwa2.company.com/PasswordVault/api/Accounts?offset=100')

    def test_pagination_error(self):
        params = get_connected_params()
        PasApiHelper.invoke_expect([
            modern_page([modern_account('1_1')], next_link='api/Accounts?offset=1'),
            requests.Timeout('read timed out'),
        ])
        with self.assertRaises(requests.Timeout):
            accounts.get_accounts(params, accounts.AccountQuery(), timeout=1)

    def test_zero_matches(self):
        params = get_connected_params()
        PasApiHelper.invoke_expect([modern_page([], count=0)])
        records = accounts.get_accounts(params, accounts.AccountQuery(search='nothing'))
        self.assertIsInstance(records, list)
        self.assertEqual(len(records), 0)

    def test_modern_query_string(self):
        params = get_connected_params()
        PasApiHelper.invoke_expect([modern_page([])])
        accounts.get_accounts(params, accounts.AccountQuery(search='root', filter="safeName eq 'Linux'"))
        url = urlparse(PasApiHelper.requested_urls()[0])
        self.assertEqual(url.path, '/PasswordVault/api/Accounts')
        self.assertEqual(parse_qsl(url.query), [('search', 'root'), ('filter', "safeName eq 'Linux'")])

    def test_legacy_query(self):
        params = get_connected_params(version='9.10')
        PasApiHelper.invoke_expect([legacy_response(account_id='19_6')])
        records = accounts.get_accounts(params, accounts.LegacyAccountQuery(keywords='root', safe='Linux'))
        url = urlparse(PasApiHelper.requested_urls()[0])
        self.assertEqual(url.path, '/PasswordVault/WebServices/PIMServices.svc/Accounts')
        self.assertEqual(parse_qsl(url.query), [('Keywords', 'root'), ('Safe', 'Linux')])
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].type_name, accounts.LEGACY_ACCOUNT_TYPE)
        self.assertEqual(records[0].account_id, '19_6')
        self.assertEqual(records[0].get('UserName'), 'root')
        self.assertEqual(records[0].to_dict()['@type'], accounts.LEGACY_ACCOUNT_TYPE)

    def test_legacy_no_matches(self):
        params = get_connected_params()
        PasApiHelper.invoke_expect([legacy_response(count=0)])
        self.assertEqual(accounts.get_accounts(params, accounts.LegacyAccountQuery(keywords='none')), [])

    def test_legacy_without_parameters(self):
        params = get_connected_params()
        PasApiHelper.invoke_expect([legacy_response()])
        accounts.get_accounts(params, accounts.LegacyAccountQuery())
        self.assertEqual(PasApiHelper.requested_urls(),
                         ['https://pvwa.company.com/PasswordVault/WebServices/PIMServices.svc/Accounts'])

    def test_search_type_version(self):
        query = accounts.AccountQuery(search='root', search_type='startswith')

        params = get_connected_params(version='10.4')
        PasApiHelper.invoke_expect([])
        with self.assertRaises(UnsupportedVersionError) as context:
            accounts.get_accounts(params, query)
        self.assertEqual(context.exception.required_version, accounts.SEARCH_TYPE_MINIMUM_VERSION)
        self.assertEqual(context.exception.actual_version, '10.4')
        self.assertEqual(len(PasApiHelper.requested_urls()), 0)

        for version in ('10.5', '10.5.0', '11.1'):
            params = get_connected_params(version=version)
            PasApiHelper.invoke_expect([modern_page([])])
            self.assertEqual(accounts.get_accounts(params, query), [])

    def test_minimum_version(self):
        params = get_connected_params(version='10.4')
        PasApiHelper.invoke_expect([modern_page([modern_account('3_1')])])
        self.assertEqual(len(accounts.get_accounts(params, accounts.AccountQuery(search='root'))), 1)

        params = get_connected_params(version='10.3')
        for query in (accounts.AccountQuery(), accounts.AccountLookup('3_1')):
            with self.assertRaises(UnsupportedVersionError) as context:
                accounts.get_accounts(params, query)
            self.assertEqual(context.exception.required_version, accounts.MINIMUM_VERSION)

    def test_unknown_version(self):
        params = get_connected_params(version=None)
        with self.assertRaises(UnsupportedVersionError):
            accounts.get_accounts(params, accounts.AccountQuery())
