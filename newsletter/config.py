"""
Environment-driven configuration for the email client.

Variables:
    EMAIL_CLIENT_BASE_URL              → base URL of the email API (without /email)
    EMAIL_CLIENT_SENDER_EMAIL          → address every email is sent from
    EMAIL_CLIENT_PUBLIC_KEY            → API public key (basic-auth username)
    EMAIL_CLIENT_PRIVATE_KEY           → API private key (basic-auth password)
    EMAIL_CLIENT_TIMEOUT_MILLISECONDS  → request timeout, defaults to 10 seconds

Default base URL points at the local mock running at http://email-mock:3001.
"""

import os
from dataclasses import dataclass

from pydantic import SecretStr

from newsletter.domain.subscriber_email import SubscriberEmail
from newsletter.services.email_client import EmailClient


@dataclass(frozen=True)
class EmailClientSettings:
    base_url: str
    sender_email: str
    public_key: SecretStr
    private_key: SecretStr
    timeout_milliseconds: int = 10_000

    @classmethod
    def from_env(cls) -> "EmailClientSettings":
        raw_timeout = os.getenv("EMAIL_CLIENT_TIMEOUT_MILLISECONDS", "10000")
        try:
            timeout_milliseconds = int(raw_timeout)
        except ValueError:
            raise ValueError(
                f"EMAIL_CLIENT_TIMEOUT_MILLISECONDS must be an integer, got {raw_timeout!r}"
            ) from None
        if timeout_milliseconds <= 0:
            raise ValueError("EMAIL_CLIENT_TIMEOUT_MILLISECONDS must be positive")

        return cls(
            base_url=os.getenv("EMAIL_CLIENT_BASE_URL", "http://email-mock:3001"),
            sender_email=os.getenv("EMAIL_CLIENT_SENDER_EMAIL", "newsletter@example.com"),
            public_key=SecretStr(os.getenv("EMAIL_CLIENT_PUBLIC_KEY", "")),
            private_key=SecretStr(os.getenv("EMAIL_CLIENT_PRIVATE_KEY", "")),
            timeout_milliseconds=timeout_milliseconds,
        )

    def sender(self) -> SubscriberEmail:
        return SubscriberEmail.parse(self.sender_email)

    @property
    def timeout(self) -> float:
        return self.timeout_milliseconds / 1000

    def client(self) -> EmailClient:
        """Build an `EmailClient`; raises ValueError if the sender address is invalid."""
        return EmailClient(
            self.base_url,
            self.sender(),
            self.public_key,
            self.private_key,
            timeout=self.timeout,
        )
