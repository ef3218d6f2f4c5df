"""
Transactional email templates for identity flows.

Each builder returns (subject, html, text). Links point at the web app.
"""

from html import escape
from urllib.parse import urlencode


def _link(app_url: str, path: str, token: str, email: str) -> str:
    return f"{app_url.rstrip('/')}/{path}?{urlencode({'token': token, 'email': email})}"


def verification_email(app_url: str, name: str, email: str, token: str) -> tuple[str, str, str]:
    link = _link(app_url, "verify-email", token, email)
    subject = "Verify your Hoardrun email address"
    html = (
        f"<p>Hi {escape(name)},</p>"
        "<p>Welcome to Hoardrun. Confirm your email address to activate your account:</p>"
        f'<p><a href="{escape(link)}">Verify email</a></p>'
        "<p>This link expires in 24 hours.</p>"
    )
    text = (
        f"Hi {name},\n\nConfirm your email address to activate your account:\n"
        f"{link}\n\nThis link expires in 24 hours."
    )
    return subject, html, text


def password_reset_email(app_url: str, name: str, email: str, token: str) -> tuple[str, str, str]:
    link = _link(app_url, "reset-password", token, email)
    subject = "Reset your Hoardrun password"
    html = (
        f"<p>Hi {escape(name)},</p>"
        "<p>We received a request to reset your password.</p>"
        f'<p><a href="{escape(link)}">Choose a new password</a></p>'
        "<p>This link expires in 1 hour. If you did not ask for a reset, ignore this email.</p>"
    )
    text = (
        f"Hi {name},\n\nReset your password here:\n{link}\n\n"
        "This link expires in 1 hour. If you did not ask for a reset, ignore this email."
    )
    return subject, html, text
