import pytest

from newsletter.domain.subscriber_email import SubscriberEmail
from newsletter.utils.logging import redact_email


def test_valid_email_is_parsed():
    email = SubscriberEmail.parse("ursula@domain.com")

    assert str(email) == "ursula@domain.com"
    assert email == SubscriberEmail.parse("ursula@domain.com")


@pytest.mark.parametrize("raw", ["", "ursuladomain.com", "@domain.com", "ursula@"])
def test_invalid_email_is_rejected(raw):
    with pytest.raises(ValueError):
        SubscriberEmail.parse(raw)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("john.doe@gmail.com", "j******e@gmail.com"),
        ("a@gmail.com", "a@gmail.com"),
        ("ab@gmail.com", "a*b@gmail.com"),
        ("no-at-sign", "<redacted>"),
    ],
)
def test_redact_email(raw, expected):
    assert redact_email(raw) == expected


def test_constructor_validates_too():
    with pytest.raises(ValueError):
        SubscriberEmail("junk")
