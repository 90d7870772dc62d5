from django.core.exceptions import ImproperlyConfigured


class MpesaError(Exception):
    """Base class for every error raised by the Daraja client."""


class ConfigurationError(MpesaError, ImproperlyConfigured):
    pass


class SerializationError(MpesaError):
    pass


class AuthenticationError(MpesaError):
    pass


class TransportError(MpesaError):
    pass


class ResponseReadError(MpesaError):
    pass
