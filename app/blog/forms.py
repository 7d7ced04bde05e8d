"""
Forms for the HTML blog pages.
"""

from django import forms
from django.utils.translation import gettext_lazy as _

from blog.models import Comment, Post


class PostForm(forms.ModelForm):
    class Meta:
        model = Post
        fields = [
            "title",
            "excerpt",
            "content",
            "image",
            "category",
            "tags",
            "status",
            "language",
        ]
        widgets = {
            "content": forms.Textarea(attrs={"rows": 16}),
            "tags": forms.CheckboxSelectMultiple,
        }

    def clean_title(self):
        title = self.cleaned_data["title"].strip()
        if not title:
            raise forms.ValidationError(_("Title cannot be blank."))
        return title


class CommentForm(forms.ModelForm):
    class Meta:
        model = Comment
        fields = ["body"]
        labels = {"body": _("Your comment")}
        widgets = {"body": forms.Textarea(attrs={"rows": 4})}
