import json
import logging
from collections.abc import Mapping

import requests
from django.conf import settings

from ..exceptions import SerializationError
from ..utils import DEFAULT_TIMEOUT, TokenCache, build_headers, fetch_token_data, post_json
from .base import ClientConfig, Environment

logger = logging.getLogger(__name__)


class MpesaDarajaClient:
    """
    Synchronous client for the Safaricom Daraja API.

    Every operation serializes its payload, fetches an access token and
    POSTs to the operation endpoint, returning the raw response body.
    Gateway errors arrive inside that body and are left to the caller.

    The underlying requests.Session is not guaranteed to be thread-safe;
    give each thread its own client, or pass a session that is.
    """

    STK_PUSH_PATH = "/mpesa/stkpush/v1/processrequest"
    STK_PUSH_QUERY_PATH = "/mpesa/stkpushquery/v1/query"
    C2B_REGISTER_URL_PATH = "/mpesa/c2b/v1/registerurl"
    C2B_SIMULATE_PATH = "/mpesa/c2b/v1/simulate"
    B2C_PATH = "/mpesa/b2c/v1/paymentrequest"
    B2B_PATH = "/mpesa/b2b/v1/paymentrequest"
    REVERSAL_PATH = "/safaricom/reversal/v1/request"
    ACCOUNT_BALANCE_PATH = "/safaricom/accountbalance/v1/query"

    def __init__(self, env, consumer_key, consumer_secret, timeout=DEFAULT_TIMEOUT,
                 session=None, cache_token=False):
        self.config = ClientConfig(consumer_key, consumer_secret, env)
        self.timeout = timeout
        self.session = session or requests.Session()
        self.token_cache = TokenCache() if cache_token else None

    @classmethod
    def from_settings(cls, **overrides):
        options = {
            'env': getattr(settings, 'MPESA_ENV', Environment.SANDBOX),
            'consumer_key': getattr(settings, 'MPESA_CONSUMER_KEY', ''),
            'consumer_secret': getattr(settings, 'MPESA_CONSUMER_SECRET', ''),
            'timeout': getattr(settings, 'MPESA_TIMEOUT', DEFAULT_TIMEOUT),
            'cache_token': getattr(settings, 'MPESA_CACHE_TOKEN', False),
        }
        options.update(overrides)
        return cls(**options)

    @property
    def base_url(self):
        return self.config.base_url

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def authenticate(self, timeout=None):
        if timeout is None:
            timeout = self.timeout

        def fetch():
            return fetch_token_data(self.config, session=self.session, timeout=timeout)

        if self.token_cache is not None:
            return self.token_cache.get(fetch)
        return fetch()["access_token"]

    def _serialize(self, payload):
        if hasattr(payload, 'as_payload'):
            payload = payload.as_payload()
        elif not isinstance(payload, Mapping):
            raise SerializationError(
                f"Cannot serialize {type(payload).__name__} as an MPESA request body"
            )
        try:
            return json.dumps(dict(payload), allow_nan=False).encode('utf-8')
        except (TypeError, ValueError) as e:
            raise SerializationError(f"MPESA request body is not JSON serializable: {e}") from e

    def _send(self, path, payload, timeout=None):
        if timeout is None:
            timeout = self.timeout
        body = self._serialize(payload)
        token = self.authenticate(timeout=timeout)
        url = self.config.url(path)
        logger.info("Sending MPESA request: %s", url)
        return post_json(self.session, url, body, build_headers(token), timeout=timeout)

    def stk_push(self, stk_push, timeout=None):
        return self._send(self.STK_PUSH_PATH, stk_push, timeout)

    def stk_push_query(self, stk_push_query, timeout=None):
        return self._send(self.STK_PUSH_QUERY_PATH, stk_push_query, timeout)

    def c2b_register_url(self, register_url, timeout=None):
        return self._send(self.C2B_REGISTER_URL_PATH, register_url, timeout)

    def c2b_simulate(self, c2b, timeout=None):
        return self._send(self.C2B_SIMULATE_PATH, c2b, timeout)

    def b2c_payment(self, b2c, timeout=None):
        return self._send(self.B2C_PATH, b2c, timeout)

    def b2b_payment(self, b2b, timeout=None):
        return self._send(self.B2B_PATH, b2b, timeout)

    def reversal(self, reversal, timeout=None):
        return self._send(self.REVERSAL_PATH, reversal, timeout)

    def account_balance(self, balance_inquiry, timeout=None):
        return self._send(self.ACCOUNT_BALANCE_PATH, balance_inquiry, timeout)
