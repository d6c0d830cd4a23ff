"""
Email client responsible for sending transactional emails through
a third-party provider that exposes a Mailjet-style JSON HTTP API.

This module must stay isolated from business logic so that:
- The provider can change without touching route handlers
- Every failure reaches the caller, who decides whether it is fatal
- The client can be pointed at a mock server in tests

Each call to `send_email` is a single attempt: no retries, no queueing.
"""

import base64
import http.client
import socket
import threading
from urllib.parse import urlparse

from pydantic import SecretStr

from newsletter.domain.subscriber_email import SubscriberEmail
from newsletter.models.schemas import Contact, Message, SendRequest
from newsletter.utils.logging import logger, redact_email

# Path appended to the configured base URL for every send.
EMAIL_PATH = "/email"

# Display names sent with every message.
SENDER_NAME = "sender"
RECIPIENT_NAME = "recipient"

DEFAULT_TIMEOUT = 10.0


class SendError(Exception):
    """Base class for every failure surfaced by `EmailClient.send_email`."""
    pass


class UrlFormatError(SendError):
    """Raised when the configured base URL cannot be turned into a target URL."""
    pass


class TransportError(SendError):
    """Raised on DNS, connection, TLS or malformed-response failures."""
    pass


class SendTimeoutError(SendError):
    """Raised when the provider does not answer within the configured timeout."""
    pass


class HttpStatusError(SendError):
    """Raised when the provider answers with a non-2xx status."""

    def __init__(self, status_code: int, reason: str = ""):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"Email API responded with {status_code} {reason}".rstrip())


class EmailClient:
    """
    Client for the email provider's HTTP API.

    Configuration is read-only after construction, so one instance can be
    shared by concurrent callers. Every send opens its own connection.
    """

    def __init__(
        self,
        base_url: str,
        sender: SubscriberEmail,
        api_public_key: SecretStr,
        api_private_key: SecretStr,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._base_url = base_url
        self._sender = sender
        self._api_public_key = api_public_key
        self._api_private_key = api_private_key
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def sender(self) -> SubscriberEmail:
        return self._sender

    @property
    def timeout(self) -> float:
        return self._timeout

    def __repr__(self) -> str:
        return (
            f"EmailClient(base_url={self._base_url!r}, sender={self._sender!r}, "
            f"timeout={self._timeout!r})"
        )

    def send_email(
        self,
        recipient: SubscriberEmail,
        subject: str,
        html_content: str,
        text_content: str,
    ) -> None:
        """
        Send one email to `recipient`.

        Performs exactly one HTTP POST to `{base_url}/email` with a JSON body
        and HTTP Basic authentication (public key as username, private key as
        password).

        Raises:
            UrlFormatError:   the base URL is malformed; nothing is sent.
            TransportError:   connection, DNS or TLS failure, or a broken response.
            SendTimeoutError: no response within the configured timeout.
            HttpStatusError:  the provider answered with a non-2xx status.
        """
        scheme, host, port, path = self._target()

        request = SendRequest(
            messages=[
                Message(
                    sender=Contact(email=str(self._sender), name=SENDER_NAME),
                    to=[Contact(email=str(recipient), name=RECIPIENT_NAME)],
                    subject=subject,
                    text_part=text_content,
                    html_part=html_content,
                )
            ]
        )
        payload = request.model_dump_json(by_alias=True)
        headers = {
            "Content-Type": "application/json",
            "Authorization": self._authorization(),
        }

        connection_class = (
            http.client.HTTPSConnection if scheme == "https" else http.client.HTTPConnection
        )
        try:
            conn = connection_class(host, port, timeout=self._timeout)
        except http.client.InvalidURL as e:
            raise UrlFormatError(f"Invalid email API base URL {self._base_url!r}: {e}") from e

        # The socket timeout bounds each read; the timer bounds the whole call
        expired = threading.Event()
        timer = threading.Timer(self._timeout, self._abort, args=(conn, expired))
        timer.daemon = True
        timer.start()
        try:
            conn.request("POST", path, body=payload.encode("utf-8"), headers=headers)
            resp = conn.getresponse()
            # Drain the body so the socket is left in a clean state
            resp.read()
        except http.client.InvalidURL as e:
            raise UrlFormatError(f"Invalid email API base URL {self._base_url!r}: {e}") from e
        except (OSError, http.client.HTTPException) as e:
            # socket.timeout is an alias of TimeoutError, itself an OSError
            if expired.is_set() or isinstance(e, TimeoutError):
                raise SendTimeoutError(
                    f"Email API did not respond within {self._timeout} seconds"
                ) from e
            raise TransportError(f"Failed to reach email API at {host}: {e}") from e
        finally:
            timer.cancel()
            conn.close()

        if expired.is_set():
            raise SendTimeoutError(f"Email API did not respond within {self._timeout} seconds")

        if not 200 <= resp.status < 300:
            raise HttpStatusError(resp.status, resp.reason)

        logger.info(f"Email sent to {redact_email(str(recipient))}")

    @staticmethod
    def _abort(conn: http.client.HTTPConnection, expired: threading.Event) -> None:
        """Cut the connection once the deadline passes, unblocking any pending read."""
        expired.set()
        sock = conn.sock
        if sock is None:
            return
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            # Already closed by the sending thread
            return

    def _target(self) -> tuple[str, str, int | None, str]:
        """Split the base URL into connection parts and the `/email` path."""
        try:
            parsed = urlparse(self._base_url)
            port = parsed.port
        except ValueError as e:
            raise UrlFormatError(f"Invalid email API base URL {self._base_url!r}: {e}") from e

        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise UrlFormatError(f"Invalid email API base URL {self._base_url!r}")

        path = parsed.path.rstrip("/") + EMAIL_PATH
        return parsed.scheme, parsed.hostname, port, path

    def _authorization(self) -> str:
        # Only place where the secrets are exposed
        credentials = (
            f"{self._api_public_key.get_secret_value()}:"
            f"{self._api_private_key.get_secret_value()}"
        )
        token = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
        return f"Basic {token}"
