"""
Factory Boy factories for blog models.

Usage:
    from blog.tests.factories import PostFactory, CommentFactory

    draft = PostFactory()
    published = PostFactory(published=True)
    comment = CommentFactory(post=published)
"""

import factory
from django.utils import timezone

from accounts.tests.factories import UserFactory
from blog.models import Category, Comment, Post, Tag


class CategoryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f"Category {n}")
    description = factory.Faker("sentence")


class TagFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Tag

    name = factory.Sequence(lambda n: f"tag{n}")


class PostFactory(factory.django.DjangoModelFactory):
    """
    Factory for Post model. Creates drafts by default.

    Traits:
        published: status=published with published_at set
        archived: status=archived
    """

    class Meta:
        model = Post
        skip_postgeneration_save = True

    author = factory.SubFactory(UserFactory)
    title = factory.Sequence(lambda n: f"Post number {n}")
    content = factory.Faker("paragraph", nb_sentences=5)
    excerpt = ""
    status = Post.Status.DRAFT
    language = "en"

    class Params:
        published = factory.Trait(
            status=Post.Status.PUBLISHED,
            published_at=factory.LazyFunction(timezone.now),
        )
        archived = factory.Trait(status=Post.Status.ARCHIVED)

    @factory.post_generation
    def tags(self, create, extracted, **kwargs):
        if create and extracted:
            self.tags.set(extracted)


class CommentFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Comment

    post = factory.SubFactory(PostFactory, published=True)
    author = factory.SubFactory(UserFactory)
    body = factory.Faker("sentence")
    is_approved = True
