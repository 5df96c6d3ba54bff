from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class SubscribeRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str = Field(min_length=3, max_length=254)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        value = value.strip().lower()
        if not EMAIL_PATTERN.match(value):
            raise ValueError("email is not a valid address")
        return value


class EmailAddress(BaseModel):
    email: str


class Personalization(BaseModel):
    to: list[EmailAddress]


class MailContent(BaseModel):
    type: Literal["text/html", "text/plain"] = "text/html"
    value: str


class SendGridMail(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    personalizations: list[Personalization]
    from_: EmailAddress = Field(alias="from")
    subject: str
    content: list[MailContent]

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
