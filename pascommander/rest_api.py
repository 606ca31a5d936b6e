#  ___  _   ___
# | _ \/_\ / __|
# |  _/ _ \\__ \
# |_|/_/ \_\___/
#
# PAS Commander
# Copyright 2026 PAS Commander contributors
#

import json
import logging
from typing import Any, Optional

from .params import RestApiContext


def build_url(context, path, query_string=''):   # type: (RestApiContext, str, str) -> str
    url = context.resolve_url(path)
    if query_string:
        url = f'{url}?{query_string}'
    return url


def invoke_rest(context, url, method='GET', timeout=None):
    # type: (RestApiContext, str, str, Optional[float]) -> Any
    """Sends one request through the shared session and returns the parsed JSON body.

    Returns None when the server answers with an empty body. HTTP status failures raise
    requests.HTTPError; timeouts and connection errors are raised by requests as they are.
    """
    logging.debug('>>> Request: [%s %s]', method, url)
    rs = context.session.request(method, url, timeout=timeout)

    if rs.status_code >= 400:
        if logging.getLogger().level <= logging.DEBUG:
            failure = None
            if (rs.headers.get('Content-Type') or '').startswith('application/json'):
                try:
                    failure = rs.json()
                except ValueError:
                    pass
            if isinstance(failure, dict):
                logging.debug('<<< Response Error: [%s] %s', failure.get('ErrorCode'), failure.get('ErrorMessage'))
            elif rs.text:
                logging.debug('<<< Response Content: [%s]', rs.text)
            else:
                logging.debug('<<< HTTP Status: [%s]  Reason: [%s]', rs.status_code, rs.reason)
    rs.raise_for_status()

    if not rs.content or not rs.content.strip():
        return None
    body = rs.json()
    if logging.getLogger().level <= logging.DEBUG:
        logging.debug('<<< Response JSON: [%s]', json.dumps(body, sort_keys=True, indent=4))
    return body
