from typing import Annotated

from fastapi import APIRouter, Form, Response, status

from newsletter.models.schemas import SubscriptionForm
from newsletter.utils.logging import logger, redact_email

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.post("", status_code=status.HTTP_200_OK)
def subscribe(form: Annotated[SubscriptionForm, Form()]):
    # No storage and no confirmation email yet: the form is only acknowledged.
    logger.info(f"Subscription form received for {redact_email(form.email)}")
    return Response(status_code=status.HTTP_200_OK)
