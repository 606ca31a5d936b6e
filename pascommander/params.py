#  ___  _   ___
# | _ \/_\ / __|
# |  _/ _ \\__ \
# |_|/_/ \_\___/
#
# PAS Commander
# Copyright 2026 PAS Commander contributors
#
from __future__ import annotations
import warnings
from typing import Optional
from urllib.parse import urlparse, urlunparse

import requests
from urllib3.exceptions import InsecureRequestWarning

DEFAULT_APPLICATION_PATH = '/PasswordVault'


class RestApiContext:
    """ Connection settings and the HTTP session shared by every request of a session """

    def __init__(self, server='', session_token=None):
        self.__server_base = ''
        self.server_base = server
        self.__session_token = session_token
        self.proxies = None
        self._certificate_check = True
        self.__session = None    # type: Optional[requests.Session]

    def __get_server_base(self):
        return self.__server_base

    def __set_server_base(self, value):    # type: (str) -> None
        if not value:
            self.__server_base = ''
            return
        if not value.startswith('http'):
            value = 'https://' + value
        p = urlparse(value)
        path = p.path.rstrip('/') or DEFAULT_APPLICATION_PATH
        self.__server_base = urlunparse((p.scheme or 'https', p.netloc, path, None, None, None))

    def __get_session_token(self):
        return self.__session_token

    def __set_session_token(self, value):
        self.__session_token = value
        if self.__session is not None:
            self._apply_session_token(self.__session)

    def _apply_session_token(self, session):   # type: (requests.Session) -> None
        if self.__session_token:
            session.headers['Authorization'] = self.__session_token
        else:
            session.headers.pop('Authorization', None)

    def set_proxy(self, proxy_server):
        if proxy_server:
            self.proxies = {
                'http': proxy_server,
                'https': proxy_server
            }
        else:
            self.proxies = None
        if self.__session is not None:
            self.__session.proxies.clear()
            if self.proxies:
                self.__session.proxies.update(self.proxies)

    @property
    def certificate_check(self):
        return self._certificate_check

    @certificate_check.setter
    def certificate_check(self, value):
        if isinstance(value, bool):
            self._certificate_check = value
            if value:
                warnings.simplefilter('default', InsecureRequestWarning)
            else:
                warnings.simplefilter('ignore', InsecureRequestWarning)
            if self.__session is not None:
                self.__session.verify = value

    @property
    def session(self):    # type: () -> requests.Session
        if self.__session is None:
            session = requests.Session()
            session.headers['Content-Type'] = 'application/json'
            session.verify = self._certificate_check
            if self.proxies:
                session.proxies.update(self.proxies)
            self._apply_session_token(session)
            self.__session = session
        return self.__session

    def close(self):
        if self.__session is not None:
            self.__session.close()
            self.__session = None

    def resolve_url(self, link):   # type: (str) -> str
        if link.startswith('http://') or link.startswith('https://'):
            return link
        return f'{self.__server_base}/{link.lstrip("/")}'

    server_base = property(__get_server_base, __set_server_base)
    session_token = property(__get_session_token, __set_session_token)


class PasParams:
    """ Session context passed to every operation """

    def __init__(self, config_filename='', config=None, server=''):
        self.config_filename = config_filename
        self.config = config or {}
        self.__server = server
        self.external_version = None    # type: Optional[str]
        self.server_info = None         # type: Optional[dict]
        self.timeout = None             # type: Optional[float]
        self.commands = []
        self.debug = False
        self.__proxy = None
        self.__rest_context = RestApiContext(server=server)

    def clear_session(self):
        self.external_version = None
        self.server_info = None
        self.__rest_context.session_token = None
        self.__rest_context.close()

    def __get_rest_context(self):
        return self.__rest_context

    def __get_server(self):
        return self.__server

    def __set_server(self, value):
        self.__server = value
        self.__rest_context.server_base = value

    def __get_proxy(self):
        return self.__proxy

    def __set_proxy(self, value):
        self.__proxy = value
        self.__rest_context.set_proxy(value)

    def __get_session_token(self):
        return self.__rest_context.session_token

    def __set_session_token(self, value):
        self.__rest_context.session_token = value

    server = property(__get_server, __set_server)
    proxy = property(__get_proxy, __set_proxy)
    session_token = property(__get_session_token, __set_session_token)
    rest_context = property(__get_rest_context)
