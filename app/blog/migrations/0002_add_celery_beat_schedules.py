"""
Seed the celery-beat schedule for purging soft-deleted posts.

Schedule:
    - purge_deleted_posts: daily at 03:30 UTC
"""

from django.db import migrations

PURGE_TASK_NAME = "blog-purge-deleted-posts"


def create_schedules(apps, schema_editor):
    CrontabSchedule = apps.get_model("django_celery_beat", "CrontabSchedule")
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")

    daily, _ = CrontabSchedule.objects.get_or_create(
        minute="30",
        hour="3",
        day_of_week="*",
        day_of_month="*",
        month_of_year="*",
        timezone="UTC",
    )

    PeriodicTask.objects.get_or_create(
        name=PURGE_TASK_NAME,
        defaults={
            "task": "blog.tasks.purge_deleted_posts",
            "crontab": daily,
            "enabled": True,
            "description": "Hard-delete posts soft-deleted longer than POST_PURGE_AFTER_DAYS",
        },
    )


def remove_schedules(apps, schema_editor):
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")
    PeriodicTask.objects.filter(name=PURGE_TASK_NAME).delete()


class Migration(migrations.Migration):

    dependencies = [
        ("blog", "0001_initial"),
        ("django_celery_beat", "0019_alter_periodictasks_options"),
    ]

    operations = [
        migrations.RunPython(create_schedules, remove_schedules),
    ]
