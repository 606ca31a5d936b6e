#  ___  _   ___
# | _ \/_\ / __|
# |  _/ _ \\__ \
# |_|/_/ \_\___/
#
# PAS Commander
# Copyright 2026 PAS Commander contributors
#
import logging
from typing import Optional

from . import rest_api
from .error import UnsupportedVersionError
from .params import PasParams

SERVER_ENDPOINT = 'WebServices/PIMServices.svc/Server'


def compare_versions(v1, v2):   # type: (str, str) -> int
    """
      Compare two dotted versions and will return:
         1 if version 1 is bigger
         0 if equal
        -1 if version 2 is bigger
    """
    arr1 = [int(i) for i in str(v1).split('.')]
    arr2 = [int(i) for i in str(v2).split('.')]

    # fill the shorter list with zero (10.4 == 10.4.0)
    n = max(len(arr1), len(arr2))
    arr1.extend([0] * (n - len(arr1)))
    arr2.extend([0] * (n - len(arr2)))

    for i in range(n):
        if arr1[i] > arr2[i]:
            return 1
        elif arr2[i] > arr1[i]:
            return -1
    return 0


def is_version_supported(actual_version, required_version):   # type: (Optional[str], str) -> bool
    if not actual_version:
        return False
    try:
        return compare_versions(actual_version, required_version) >= 0
    except ValueError:
        logging.debug('Cannot parse server version "%s"', actual_version)
        return False


def assert_version_requirement(params, required_version):   # type: (PasParams, str) -> None
    actual_version = params.external_version
    if not is_version_supported(actual_version, required_version):
        raise UnsupportedVersionError(required_version, actual_version)


def load_server_version(params, timeout=None):   # type: (PasParams, Optional[float]) -> Optional[dict]
    """Reads the server information and caches it with its ExternalVersion in the session."""
    url = rest_api.build_url(params.rest_context, SERVER_ENDPOINT)
    server_info = rest_api.invoke_rest(params.rest_context, url, timeout=timeout)
    params.server_info = server_info if isinstance(server_info, dict) else {}
    version = params.server_info.get('ExternalVersion')
    if version:
        params.external_version = str(version)
        logging.debug('PVWA server version: %s', params.external_version)
    else:
        logging.warning('PVWA server did not report its version')
    return server_info


def ensure_server_version(params, timeout=None):   # type: (PasParams, Optional[float]) -> None
    if params.external_version or params.server_info is not None:
        return
    load_server_version(params, timeout=timeout)
