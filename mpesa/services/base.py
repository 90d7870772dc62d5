from dataclasses import dataclass

from django.db import models

from ..exceptions import ConfigurationError


class Environment(models.TextChoices):
    SANDBOX = 'sandbox', 'Sandbox'
    PRODUCTION = 'production', 'Production'


BASE_URLS = {
    Environment.SANDBOX: 'https://sandbox.safaricom.co.ke',
    Environment.PRODUCTION: 'https://api.safaricom.co.ke',
}


@dataclass(frozen=True)
class ClientConfig:
    """Daraja app credentials and the environment they belong to."""

    consumer_key: str
    consumer_secret: str
    env: Environment = Environment.SANDBOX

    def __post_init__(self):
        if not self.consumer_key or not self.consumer_secret:
            raise ConfigurationError("MPESA consumer_key and consumer_secret are required")
        try:
            env = Environment(str(self.env).lower())
        except ValueError:
            raise ConfigurationError(
                f"MPESA environment must be 'sandbox' or 'production', got {self.env!r}"
            ) from None
        object.__setattr__(self, 'env', env)

    @property
    def base_url(self) -> str:
        return BASE_URLS[self.env]

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def __repr__(self):
        return f"ClientConfig(consumer_key={self.consumer_key!r}, env={self.env.value!r})"
