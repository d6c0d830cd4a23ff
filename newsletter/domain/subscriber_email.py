from pydantic import EmailStr, TypeAdapter, ValidationError

_email_adapter = TypeAdapter(EmailStr)


class SubscriberEmail:
    """
    A syntactically valid email address.

    The address is validated on construction, so holding an instance means
    it has already been checked.
    """

    __slots__ = ("_value",)

    def __init__(self, raw: str):
        """
        Raises:
            ValueError: if `raw` is not a valid email address.
        """
        try:
            self._value = _email_adapter.validate_python(raw)
        except ValidationError:
            raise ValueError(f"{raw!r} is not a valid subscriber email.") from None

    @classmethod
    def parse(cls, raw: str) -> "SubscriberEmail":
        return cls(raw)

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"SubscriberEmail({self._value!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, SubscriberEmail):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)
