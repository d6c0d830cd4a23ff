import logging
import os

# e.g. NEWSLETTER_LOG_LEVEL=DEBUG
LOG_LEVEL = os.getenv("NEWSLETTER_LOG_LEVEL", "INFO").upper()

logger = logging.getLogger("newsletter")
logger.setLevel(LOG_LEVEL)

# A single stream handler; re-imports must not stack handlers
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")
    )
    logger.addHandler(handler)


def redact_email(email: str) -> str:
    """
    Redact an email address before it reaches a log line.

    Rules:
    - Keep first and last character of the local part
    - Replace all middle characters with '*'
    - Keep the domain intact

    Examples:
        "ursula.le.guin@gmail.com" → "u************n@gmail.com"
        "a@gmail.com"              → "a@gmail.com"
        "ab@gmail.com"             → "a*b@gmail.com"
    """
    email = str(email)
    if "@" not in email:
        return "<redacted>"

    local, domain = email.split("@", 1)

    if not local:
        return f"<redacted>@{domain}"

    if len(local) <= 2:
        # Too short to hide anything; keep the minimal mask
        return f"{local[0]}*{local[-1]}@{domain}" if len(local) == 2 else f"{local}@{domain}"

    masked_local = local[0] + ("*" * (len(local) - 2)) + local[-1]

    return f"{masked_local}@{domain}"
