from pydantic import BaseModel, Field


class SubscriptionForm(BaseModel):
    email: str
    name: str


# Wire format of the email API: field names are fixed by the provider.
class Contact(BaseModel):
    email: str = Field(serialization_alias="Email")
    name: str = Field(serialization_alias="Name")


class Message(BaseModel):
    sender: Contact = Field(serialization_alias="From")
    to: list[Contact] = Field(serialization_alias="To")
    subject: str = Field(serialization_alias="Subject")
    text_part: str = Field(serialization_alias="TextPart")
    html_part: str = Field(serialization_alias="HTMLPart")


class SendRequest(BaseModel):
    messages: list[Message] = Field(serialization_alias="Messages")
