"""
Email service for centralized email sending.

This module provides the EmailService class for sending emails with:
- Django template rendering for HTML and plain text
- Per-recipient language via translation.override
- Attachment handling

Related files:
    - blog/tasks.py: send_comment_notification (queued on commit)
    - templates/emails/: Email templates

Configuration:
    Email settings are read from Django settings:
    - EMAIL_BACKEND
    - EMAIL_HOST, EMAIL_PORT
    - DEFAULT_FROM_EMAIL

Usage:
    from toolkit.services.email import EmailService

    EmailService.send(
        to="author@example.com",
        subject="New comment on your post",
        template_name="emails/comment_notification",
        context={"post": post, "comment": comment},
        language="es",
    )
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template import TemplateDoesNotExist
from django.template.loader import render_to_string
from django.utils import translation
from django.utils.html import strip_tags

logger = logging.getLogger(__name__)


class EmailService:
    """
    Centralized email sending with template support.

    Send failures are logged and reported through the boolean return value;
    callers running inside Celery tasks decide whether to retry.
    """

    @staticmethod
    def send(
        to: str | list[str],
        subject: str,
        template_name: str,
        context: dict,
        from_email: str | None = None,
        reply_to: str | None = None,
        attachments: list[tuple] | None = None,
        language: str | None = None,
    ) -> bool:
        """
        Send email using a template.

        Args:
            to: Recipient email address(es)
            subject: Email subject line
            template_name: Name of template (without extension)
                           Looks for: {template_name}.html and {template_name}.txt
            context: Template context variables
            from_email: Sender email (defaults to DEFAULT_FROM_EMAIL)
            reply_to: Reply-to address
            attachments: List of (filename, content, mimetype) tuples
            language: Language code to render the templates in

        Returns:
            True if email was sent successfully
        """
        with translation.override(language or settings.LANGUAGE_CODE):
            try:
                html_content = render_to_string(f"{template_name}.html", context)
            except TemplateDoesNotExist:
                html_content = None

            try:
                text_content = render_to_string(f"{template_name}.txt", context)
            except TemplateDoesNotExist:
                if html_content is None:
                    raise
                text_content = strip_tags(html_content)

        return EmailService.send_raw(
            to=to,
            subject=subject,
            body_text=text_content,
            body_html=html_content,
            from_email=from_email,
            reply_to=reply_to,
            attachments=attachments,
        )

    @staticmethod
    def send_raw(
        to: str | list[str],
        subject: str,
        body_text: str,
        body_html: str | None = None,
        from_email: str | None = None,
        reply_to: str | None = None,
        attachments: list[tuple] | None = None,
    ) -> bool:
        """
        Send email with raw content (no template).

        Returns:
            True if email was sent successfully
        """
        if isinstance(to, str):
            to = [to]

        email = EmailMultiAlternatives(
            subject=subject,
            body=body_text,
            from_email=from_email or settings.DEFAULT_FROM_EMAIL,
            to=to,
            reply_to=[reply_to] if reply_to else None,
        )

        if body_html:
            email.attach_alternative(body_html, "text/html")

        for filename, content, mimetype in attachments or []:
            email.attach(filename, content, mimetype)

        try:
            email.send(fail_silently=False)
        except Exception as e:
            logger.error(
                f"Failed to send email to {to}: {e}",
                extra={"recipients": to, "subject": subject},
            )
            return False

        logger.info(f"Email sent to {to}: {subject}")
        return True
