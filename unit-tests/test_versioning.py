from unittest import TestCase, mock

from data_accounts import get_connected_params, get_user_params, server_info
from helper import PasApiHelper
from pascommander import versioning
from pascommander.error import UnsupportedVersionError


class TestVersioning(TestCase):
    def setUp(self):
        self.invoke_mock = mock.patch('pascommander.rest_api.invoke_rest').start()
        self.invoke_mock.side_effect = PasApiHelper.invoke_rest

    def tearDown(self):
        mock.patch.stopall()

    def test_compare_versions(self):
        self.assertEqual(versioning.compare_versions('10.4', '10.4'), 0)
        self.assertEqual(versioning.compare_versions('10.4', '10.4.0'), 0)
        self.assertEqual(versioning.compare_versions('10.10', '10.9'), 1)
        self.assertEqual(versioning.compare_versions('9.10', '10.4'), -1)
        self.assertEqual(versioning.compare_versions('12.6.1', '12.6'), 1)

    def test_is_version_supported(self):
        self.assertTrue(versioning.is_version_supported('10.5', '10.5'))
        self.assertFalse(versioning.is_version_supported('10.4.9', '10.5'))
        self.assertFalse(versioning.is_version_supported(None, '10.4'))
        self.assertFalse(versioning.is_version_supported('v12', '10.4'))

    def test_assert_version_requirement(self):
        params = get_connected_params(version='11.1')
        versioning.assert_version_requirement(params, '10.4')
        versioning.assert_version_requirement(params, '11.1')
        with self.assertRaises(UnsupportedVersionError) as context:
            versioning.assert_version_requirement(params, '12.0')
        self.assertEqual(context.exception.required_version, '12.0')
        self.assertEqual(context.exception.actual_version, '11.1')
        self.assertIn('12.0', str(context.exception))
        self.assertIn('11.1', str(context.exception))

    def test_load_server_version(self):
        params = get_user_params()
        PasApiHelper.invoke_expect([server_info('11.2')])
        info = versioning.load_server_version(params, timeout=30)
        self.assertTrue(PasApiHelper.is_expect_empty())
        self.assertEqual(PasApiHelper.requested_urls(),
                         ['https://pvwa.company.com/PasswordVault/WebServices/PIMServices.svc/Server'])
        self.assertEqual(PasApiHelper.timeouts(), [30])
        self.assertEqual(info['ServerName'], 'Vault')
        self.assertEqual(params.external_version, '11.2')
        self.assertIs(params.server_info, info)

    def test_load_server_version_missing(self):
        params = get_user_params()
        PasApiHelper.invoke_expect([{'ServerName': 'Vault'}])
        with self.assertLogs(level='WARNING'):
            versioning.load_server_version(params)
        self.assertIsNone(params.external_version)

    def test_ensure_server_version(self):
        params = get_user_params()
        PasApiHelper.invoke_expect([None])
        with self.assertLogs(level='WARNING'):
            versioning.ensure_server_version(params)
        self.assertEqual(params.server_info, {})
        self.assertIsNone(params.external_version)

        PasApiHelper.invoke_expect([])
        versioning.ensure_server_version(params)
        self.assertEqual(len(PasApiHelper.requested_urls()), 0)

        params = get_connected_params(version='11.1')
        versioning.ensure_server_version(params)
        self.assertEqual(len(PasApiHelper.requested_urls()), 0)
