from __future__ import annotations

import httpx

from .schemas import EmailAddress, MailContent, Personalization, SendGridMail


SENDGRID_SEND_URL = "https://api.sendgrid.com/v3/mail/send"
CONFIRM_PATH = "/api/v1/newsletter/confirm"
CONFIRM_SUBJECT = "Confirm your subscription"


class ConfirmationEmailError(Exception):
    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class MailerConfigError(ConfirmationEmailError):
    def __init__(self, field: str) -> None:
        super().__init__(f"missing {field}")
        self.field = field


def build_confirm_url(base_url: str, token: str) -> str:
    return f"{base_url.rstrip('/')}{CONFIRM_PATH}?token={token}"


def _confirmation_mail(email: str, from_email: str, confirm_url: str) -> SendGridMail:
    return SendGridMail(
        personalizations=[Personalization(to=[EmailAddress(email=email)])],
        from_=EmailAddress(email=from_email),
        subject=CONFIRM_SUBJECT,
        content=[
            MailContent(
                type="text/html",
                value=(
                    f'<p>Click <a href="{confirm_url}">here</a> '
                    "to confirm your newsletter subscription.</p>"
                ),
            )
        ],
    )


class SendGridMailer:
    def __init__(
        self,
        api_key: str | None,
        from_email: str | None,
        base_url: str | None,
        timeout_seconds: float = 10,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.api_key = api_key
        self.from_email = from_email
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self._http_client = http_client

    def send_confirmation(self, email: str, token: str) -> None:
        if not self.api_key:
            raise MailerConfigError("SENDGRID_API_KEY")
        if not self.from_email:
            raise MailerConfigError("FROM_EMAIL")
        if not self.base_url:
            raise MailerConfigError("BASE_URL")

        confirm_url = build_confirm_url(self.base_url, token)
        payload = _confirmation_mail(email, self.from_email, confirm_url).to_payload()
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            if self._http_client is not None:
                response = self._http_client.post(SENDGRID_SEND_URL, json=payload, headers=headers)
            else:
                with httpx.Client(timeout=self.timeout_seconds) as client:
                    response = client.post(SENDGRID_SEND_URL, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            raise ConfirmationEmailError("SendGrid request failed") from exc

        if not response.is_success:
            body = response.text
            raise ConfirmationEmailError(
                f"SendGrid returned {response.status_code}: {body}",
                status_code=response.status_code,
                body=body,
            )
