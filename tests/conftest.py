"""Pytest fixtures for the Daraja client tests."""

import json

import django
import pytest
from django.conf import settings

if not settings.configured:
    settings.configure(
        INSTALLED_APPS=['mpesa'],
        MPESA_ENV='sandbox',
        MPESA_CONSUMER_KEY='settings-key',
        MPESA_CONSUMER_SECRET='settings-secret',
    )
    django.setup()


class FakeResponse:
    def __init__(self, status_code=200, body=b"", encoding=None, read_error=None):
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode('utf-8')
        self.status_code = status_code
        self._body = body
        self.encoding = encoding
        self._read_error = read_error
        self.closed = False

    @property
    def content(self):
        if self._read_error is not None:
            raise self._read_error
        return self._body

    @property
    def text(self):
        return self._body.decode('utf-8')

    def json(self):
        return json.loads(self._body)

    def close(self):
        self.closed = True


class FakeSession:
    """Records every call and answers with a fixed response (or raises) per method."""

    def __init__(self, token_response=None, post_response=None):
        self.token_response = token_response or FakeResponse(
            body={"access_token": "T", "expires_in": "3599"}
        )
        self.post_response = post_response or FakeResponse(body={"ResponseCode": "0"})
        self.gets = []
        self.posts = []
        self.closed = False

    def get(self, url, auth=None, headers=None, timeout=None):
        self.gets.append({"url": url, "auth": auth, "headers": headers, "timeout": timeout})
        if isinstance(self.token_response, Exception):
            raise self.token_response
        return self.token_response

    def post(self, url, data=None, headers=None, timeout=None, stream=False):
        self.posts.append({"url": url, "data": data, "headers": headers, "timeout": timeout})
        if isinstance(self.post_response, Exception):
            raise self.post_response
        return self.post_response

    def close(self):
        self.closed = True


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(session):
    from mpesa import MpesaDarajaClient

    return MpesaDarajaClient(env='sandbox', consumer_key='k', consumer_secret='s', session=session)
