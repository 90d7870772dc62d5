from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    MpesaError,
    ResponseReadError,
    SerializationError,
    TransportError,
)
from .payloads import B2B, B2C, C2B, BalanceInquiry, C2BRegisterURL, Reversal, STKPush, STKPushQuery
from .services.base import ClientConfig, Environment
from .services.mpesa import MpesaDarajaClient

__version__ = "0.1.0"

__all__ = [
    'MpesaDarajaClient',
    'ClientConfig',
    'Environment',
    'STKPush',
    'STKPushQuery',
    'C2BRegisterURL',
    'C2B',
    'B2C',
    'B2B',
    'Reversal',
    'BalanceInquiry',
    'MpesaError',
    'ConfigurationError',
    'SerializationError',
    'AuthenticationError',
    'TransportError',
    'ResponseReadError',
]
