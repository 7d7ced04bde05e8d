"""
Custom blog signals.

Signals:
    post_published(sender, post): a post entered the published state
    comment_posted(sender, comment): a comment was created

Senders are the service classes in blog.services. Receivers live in
blog.receivers (cache, e-mail) and webhooks.receivers (outbound events).
"""

from django.dispatch import Signal

post_published = Signal()
comment_posted = Signal()
