import base64
import datetime
import logging
import threading
import time

import requests
from requests.auth import HTTPBasicAuth

from .exceptions import AuthenticationError, ResponseReadError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10
TOKEN_PATH = "/oauth/v1/generate?grant_type=client_credentials"


def fetch_token_data(config, session=None, timeout=DEFAULT_TIMEOUT):
    """
    Call the OAuth endpoint and return its decoded JSON body.

    The body is guaranteed to carry a non-empty ``access_token``; every
    other outcome raises ``AuthenticationError``.
    """
    session = session or requests
    url = config.url(TOKEN_PATH)
    headers = {
        "Cache-Control": "no-cache",
        "Accept": "application/json",
    }
    try:
        response = session.get(
            url,
            auth=HTTPBasicAuth(config.consumer_key, config.consumer_secret),
            headers=headers,
            timeout=timeout,
        )
    except requests.RequestException as e:
        logger.warning("MPESA OAuth request failed: %s", e)
        raise AuthenticationError(f"MPESA OAuth request failed: {e}") from e

    # Ensure we have a successful response and valid JSON
    if response.status_code != 200:
        logger.warning("MPESA OAuth rejected credentials: status=%s", response.status_code)
        raise AuthenticationError(
            f"MPESA OAuth error: status={response.status_code}, body={response.text}"
        )
    try:
        data = response.json()
    except ValueError as e:
        raise AuthenticationError(
            f"MPESA OAuth returned non-JSON body: status={response.status_code}, body={response.text}"
        ) from e
    if not isinstance(data, dict) or not data.get("access_token"):
        raise AuthenticationError(f"MPESA OAuth JSON missing access_token: {data}")

    logger.debug("Received MPESA access token (expires_in=%s)", data.get("expires_in"))
    return data


def get_access_token(config, session=None, timeout=DEFAULT_TIMEOUT):
    return fetch_token_data(config, session=session, timeout=timeout)["access_token"]


class TokenCache:
    """
    Keeps one access token until shortly before it expires.

    ``margin`` seconds are taken off the lifetime reported by the gateway so
    a token is never sent right at its expiry.
    """

    def __init__(self, margin=60, clock=time.monotonic):
        self.margin = margin
        self._clock = clock
        self._lock = threading.Lock()
        self._token = None
        self._expires_at = 0.0

    def get(self, fetch):
        with self._lock:
            now = self._clock()
            if self._token and now < self._expires_at:
                logger.debug("Using cached MPESA access token")
                return self._token
            data = fetch()
            try:
                lifetime = float(data.get("expires_in") or 0)
            except (TypeError, ValueError):
                lifetime = 0.0
            self._token = data["access_token"]
            self._expires_at = now + max(lifetime - self.margin, 0.0)
            return self._token

    def clear(self):
        with self._lock:
            self._token = None
            self._expires_at = 0.0


def build_headers(token, extra=None):
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {token}",
        "Cache-Control": "no-cache",
    }
    if extra:
        headers.update(extra)
    return headers


def post_json(session, url, body, headers, timeout=DEFAULT_TIMEOUT):
    """
    POST ``body`` to ``url`` and return the response body as text.

    The status code is not inspected: Daraja reports failures inside the
    body, so 4xx/5xx bodies are returned just like successful ones.
    """
    try:
        response = session.post(url, data=body, headers=headers, timeout=timeout, stream=True)
    except requests.RequestException as e:
        raise TransportError(f"Failed to reach MPESA API at {url}: {e}") from e

    try:
        content = response.content
    except requests.RequestException as e:
        raise ResponseReadError(f"Failed to read MPESA response from {url}: {e}") from e
    finally:
        response.close()

    logger.info("MPESA response received: url=%s status=%s", url, response.status_code)
    # JSON bodies are UTF-8; a declared charset is ignored
    return content.decode('utf-8', errors='replace')


def generate_timestamp(now=None):
    now = now or datetime.datetime.now()
    return now.strftime('%Y%m%d%H%M%S')


def generate_password(shortcode, passkey, timestamp):
    raw = f"{shortcode}{passkey}{timestamp}".encode('utf-8')
    return base64.b64encode(raw).decode('utf-8')
