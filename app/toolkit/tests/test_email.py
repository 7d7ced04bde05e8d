"""
Tests for toolkit.services.email.EmailService.

Templates are rendered from the project's templates/emails directory;
the locmem backend collects outgoing messages in mailoutbox.
"""

from types import SimpleNamespace

import pytest
from django.template import TemplateDoesNotExist

from toolkit.services import EmailService


@pytest.fixture
def comment_context():
    author = SimpleNamespace(get_full_name=lambda: "Reader")
    post = SimpleNamespace(title="Hello Django", slug="hello-django")
    comment = SimpleNamespace(author=author, body="Great post!", post=post)
    return {"post": post, "comment": comment, "post_url": "http://testserver/posts/hello-django/"}


class TestSendRaw:
    def test_sends_text_and_html(self, mailoutbox):
        sent = EmailService.send_raw(
            to="author@example.com",
            subject="Hi",
            body_text="plain",
            body_html="<p>html</p>",
        )

        assert sent is True
        assert len(mailoutbox) == 1
        message = mailoutbox[0]
        assert message.to == ["author@example.com"]
        assert message.body == "plain"
        assert message.alternatives[0][1] == "text/html"

    def test_uses_default_from_email(self, mailoutbox, settings):
        settings.DEFAULT_FROM_EMAIL = "blog@example.com"

        EmailService.send_raw(to=["a@example.com"], subject="s", body_text="b")

        assert mailoutbox[0].from_email == "blog@example.com"

    def test_reply_to_and_attachments(self, mailoutbox):
        EmailService.send_raw(
            to="a@example.com",
            subject="s",
            body_text="b",
            reply_to="editor@example.com",
            attachments=[("notes.txt", "hello", "text/plain")],
        )

        message = mailoutbox[0]
        assert message.reply_to == ["editor@example.com"]
        assert message.attachments[0][0] == "notes.txt"

    def test_returns_false_when_backend_fails(self, mocker):
        mocker.patch(
            "toolkit.services.email.EmailMultiAlternatives.send",
            side_effect=ConnectionRefusedError("smtp down"),
        )

        assert EmailService.send_raw(to="a@example.com", subject="s", body_text="b") is False


class TestSendTemplate:
    def test_renders_both_templates(self, mailoutbox, comment_context):
        sent = EmailService.send(
            to="author@example.com",
            subject="New comment",
            template_name="emails/comment_notification",
            context=comment_context,
        )

        assert sent is True
        message = mailoutbox[0]
        assert "Great post!" in message.body
        assert "Hello Django" in message.alternatives[0][0]

    def test_missing_templates_raise(self, comment_context):
        with pytest.raises(TemplateDoesNotExist):
            EmailService.send(
                to="author@example.com",
                subject="s",
                template_name="emails/does_not_exist",
                context=comment_context,
            )
