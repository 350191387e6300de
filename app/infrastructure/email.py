"""Utility helpers for sending transactional email notifications via SendGrid."""

from __future__ import annotations

import json
import logging
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from app.config import get_settings

logger = logging.getLogger(__name__)


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages = [
                str(item["message"])
                for item in errors
                if isinstance(item, dict) and item.get("message")
            ]
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    return None


def _log_sendgrid_failure(status_code: Any, body: Any) -> None:
    details = _extract_sendgrid_error_details(body)
    if status_code and details:
        logger.error("SendGrid API request failed with status %s: %s", status_code, details)
    elif status_code:
        logger.error("SendGrid API request failed with status %s", status_code)
    elif details:
        logger.error("SendGrid API request failed: %s", details)
    else:
        logger.error("SendGrid API request failed")


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Send an email using the configured SendGrid credentials."""

    settings = get_settings()
    if not settings.email_enabled:
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        return False

    message = Mail(
        from_email=(settings.sendgrid_sender, "TaskFlow"),
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:  # pragma: no cover - network failures depend on environment
        _log_sendgrid_failure(getattr(exc, "status_code", None), getattr(exc, "body", None))
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_sendgrid_failure(status_code, getattr(response, "body", None))
        return False

    return True


def build_verification_url(token: str) -> str:
    settings = get_settings()
    return f"{settings.client_url.rstrip('/')}/#/verify-email?token={token}"


def send_verification_email(email: str, url: str) -> bool:
    """Send the account verification link to ``email``."""

    ttl_hours = get_settings().email_verification_ttl_hours
    subject = "Verify your TaskFlow account"
    html_content = "".join(
        (
            "<h1>Welcome to TaskFlow!</h1>",
            "<p>Please verify your email address to get started with TaskFlow.</p>",
            f'<p><a href="{url}">Verify Email Address</a></p>',
            f"<p>This link expires in {ttl_hours} hours.</p>",
        )
    )
    return send_email(subject, html_content, email)
