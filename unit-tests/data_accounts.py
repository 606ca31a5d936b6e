from typing import List, Optional

from pascommander import params

_SERVER = 'pvwa.company.com'
_SERVER_BASE = 'https://pvwa.company.com/PasswordVault'
_SESSION_TOKEN = 'ZGVhZGJlZWYtc2Vzc2lvbi10b2tlbg=='
_SERVER_VERSION = '12.6.0'


def get_user_params():
    p = params.PasParams(server=_SERVER)
    return p


def get_connected_params(version=_SERVER_VERSION):   # type: (Optional[str]) -> params.PasParams
    p = get_user_params()
    p.session_token = _SESSION_TOKEN
    p.external_version = version
    return p


def modern_account(account_id, name=None, safe_name='Linux', user_name='root', address='10.0.0.1'):
    return {
        'id': account_id,
        'name': name or f'Operating System-UnixSSH-{address}-{user_name}',
        'address': address,
        'userName': user_name,
        'platformId': 'UnixSSH',
        'safeName': safe_name,
        'secretType': 'password',
        'platformAccountProperties': {},
        'secretManagement': {
            'automaticManagementEnabled': True,
            'lastModifiedTime': 1700000000,
        },
        'createdTime': 1690000000,
    }


def modern_page(accounts, next_link=None, count=None):   # type: (List[dict], Optional[str], Optional[int]) -> dict
    rs = {
        'value': accounts,
        'count': len(accounts) if count is None else count,
    }
    if next_link is not None:
        rs['nextLink'] = next_link
    return rs


def legacy_response(account_id='19_6', properties=None, internal_properties=None, count=1):
    if properties is None:
        properties = {'Safe': 'Linux', 'Folder': 'Root', 'Name': 'root-10.0.0.1',
                      'UserName': 'root', 'Address': '10.0.0.1', 'PolicyID': 'UnixSSH'}
    if internal_properties is None:
        internal_properties = {'CreationMethod': 'PVWA'}
    accounts = []
    if count > 0:
        accounts.append({
            'AccountID': account_id,
            'Properties': [{'Key': k, 'Value': v} for k, v in properties.items()],
            'InternalProperties': [{'Key': k, 'Value': v} for k, v in internal_properties.items()],
        })
    return {
        'Count': count,
        'accounts': accounts,
    }


def server_info(version=_SERVER_VERSION):
    return {
        'ApplicationName': 'PasswordVault',
        'ExternalVersion': version,
        'InternalVersion': 12600,
        'ServerName': 'Vault',
        'ServerId': 'ec2f4512-a65d-4a3b-9fd1-bb8ad9b0a3e5',
        'AuthenticationMethods': [{'Id': 'cyberark', 'Enabled': True}],
    }
