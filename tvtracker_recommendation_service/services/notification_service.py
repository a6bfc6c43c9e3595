"""Deliver recommendation emails through the SendGrid v3 HTTP API."""
from typing import Dict, Optional
import logging
import requests

from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from tvtracker_recommendation_service.config import (
    get_email_timeout,
    get_sendgrid_api_key,
    get_sendgrid_api_url,
    get_sendgrid_from_email,
    get_sendgrid_from_name,
)
from tvtracker_recommendation_service.errors import NotificationError

logger = logging.getLogger(__name__)


class SendGridNotifier:
    """Send plain-text + HTML emails via SendGrid."""

    def __init__(
            self,
            api_key: Optional[str] = None,
            from_email: Optional[str] = None,
            from_name: Optional[str] = None,
            api_url: Optional[str] = None,
            timeout: Optional[int] = None
    ):
        self.api_key = api_key or get_sendgrid_api_key()
        self.from_email = from_email or get_sendgrid_from_email()
        self.from_name = from_name or get_sendgrid_from_name()
        self.api_url = api_url or get_sendgrid_api_url()
        self.timeout = timeout if timeout is not None else get_email_timeout()

        if not self.api_key:
            raise ValueError("SENDGRID_API_KEY is not configured. Set the SENDGRID_API_KEY environment variable.")
        if not self.from_email:
            raise ValueError("SENDGRID_FROM_EMAIL is not configured. Set the SENDGRID_FROM_EMAIL environment variable.")

        # One retry on throttling/server errors only; 4xx auth/validation errors are final.
        # Retry-After is ignored so a throttled send cannot sleep past the configured timeout.
        self.session = requests.Session()
        retry_strategy = Retry(
            total=1,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=frozenset(["POST"]),
            respect_retry_after_header=False,
            raise_on_status=False
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        # noinspection HttpUrlsUsage
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def build_payload(
            self,
            to_address: str,
            to_display_name: Optional[str],
            subject: str,
            plain_body: str,
            html_body: Optional[str]
    ) -> Dict:
        """Build a SendGrid v3 mail/send request body."""
        content = [{"type": "text/plain", "value": plain_body}]
        if html_body:
            content.append({"type": "text/html", "value": html_body})

        return {
            "personalizations": [
                {"to": [{"email": to_address, "name": to_display_name or to_address}]}
            ],
            "from": {"email": self.from_email, "name": self.from_name},
            "subject": subject,
            "content": content,
        }

    def send(
            self,
            to_address: str,
            to_display_name: Optional[str],
            subject: str,
            plain_body: str,
            html_body: Optional[str]
    ) -> Dict:
        """
        Send an email.

        Args:
            to_address: Recipient email address
            to_display_name: Recipient name (falls back to the address)
            subject: Subject line
            plain_body: Plain-text body
            html_body: HTML body

        Returns:
            Dict with status_code and message_id

        Raises:
            NotificationError: if the request fails or SendGrid rejects it
        """
        payload = self.build_payload(to_address, to_display_name, subject, plain_body, html_body)
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            response = self.session.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise NotificationError(f"Email provider request failed: {e}") from e

        if not response.ok:
            raise NotificationError(
                f"Email provider returned {response.status_code}: {response.text[:500]}",
                status_code=response.status_code
            )

        logger.info(f"✓ Email sent to {to_address} (status: {response.status_code})")
        return {
            "status_code": response.status_code,
            "message_id": response.headers.get("X-Message-Id"),
        }
