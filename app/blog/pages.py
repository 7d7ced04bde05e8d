"""
Server-rendered blog pages (Django templates).

URL Structure:
    /                     post_list    (cached for anonymous visitors)
    /posts/new/           post_create  (login required)
    /posts/<slug>/        post_detail  (comment form POSTs here)
    /posts/<slug>/edit/   post_edit    (author only)
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.contrib.auth.views import redirect_to_login
from django.core.exceptions import PermissionDenied
from django.core.paginator import Paginator
from django.shortcuts import get_object_or_404, redirect, render
from django.template.response import TemplateResponse
from django.utils.translation import gettext as _
from django.views.decorators.http import require_GET, require_http_methods

from blog.cache import anonymous_list_cache_key
from blog.forms import CommentForm, PostForm
from blog.models import Category, Post, Tag
from blog.services import CommentService, PostService
from core.decorators import cache_response

logger = logging.getLogger(__name__)

POSTS_PER_PAGE = 10


@require_GET
@cache_response(
    timeout=settings.POST_LIST_CACHE_SECONDS, key_func=anonymous_list_cache_key
)
def post_list(request):
    posts = Post.objects.visible_to(request.user).for_listing()

    category = None
    if request.GET.get("category"):
        category = get_object_or_404(Category, slug=request.GET["category"])
        posts = posts.filter(category=category)

    tag = None
    if request.GET.get("tag"):
        tag = get_object_or_404(Tag, slug=request.GET["tag"])
        posts = posts.filter(tags=tag)

    page = Paginator(posts, POSTS_PER_PAGE).get_page(request.GET.get("page"))
    return TemplateResponse(
        request,
        "blog/post_list.html",
        {
            "page_obj": page,
            "posts": page.object_list,
            "category": category,
            "tag": tag,
            "categories": Category.objects.all(),
        },
    )


@require_http_methods(["GET", "POST"])
def post_detail(request, slug):
    post = get_object_or_404(
        Post.objects.visible_to(request.user).for_listing(), slug=slug
    )

    if request.method == "POST":
        if not request.user.is_authenticated:
            return redirect_to_login(request.get_full_path())

        form = CommentForm(request.POST)
        if form.is_valid():
            result = CommentService.add_comment(
                post=post, author=request.user, body=form.cleaned_data["body"]
            )
            if result:
                messages.success(request, _("Your comment was posted."))
                return redirect(post)
            messages.error(request, result.error)
    else:
        form = CommentForm()
        PostService.increment_views(post)

    comments = post.comments.filter(is_approved=True).select_related(
        "author", "author__profile"
    )
    return render(
        request,
        "blog/post_detail.html",
        {
            "post": post,
            "comments": comments,
            "form": form,
            "can_edit": request.user.is_authenticated
            and post.author_id == request.user.pk,
        },
    )


@login_required
@require_http_methods(["GET", "POST"])
def post_create(request):
    if request.method == "POST":
        form = PostForm(request.POST, request.FILES)
        if form.is_valid():
            post = form.save(commit=False)
            post.author = request.user
            post.save()
            form.save_m2m()
            PostService.record_status_change(post, previous_status=None)
            messages.success(request, _("Post created."))
            return redirect(post)
    else:
        form = PostForm()

    return render(request, "blog/post_form.html", {"form": form, "post": None})


@login_required
@require_http_methods(["GET", "POST"])
def post_edit(request, slug):
    post = get_object_or_404(Post.objects.visible_to(request.user), slug=slug)
    if post.author_id != request.user.pk:
        raise PermissionDenied

    previous_status = post.status
    if request.method == "POST":
        form = PostForm(request.POST, request.FILES, instance=post)
        if form.is_valid():
            post = form.save()
            PostService.record_status_change(post, previous_status=previous_status)
            messages.success(request, _("Post updated."))
            return redirect(post)
    else:
        form = PostForm(instance=post)

    return render(request, "blog/post_form.html", {"form": form, "post": post})
