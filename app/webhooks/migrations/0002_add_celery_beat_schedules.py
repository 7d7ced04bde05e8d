"""
Seed the celery-beat schedule for retrying failed webhook deliveries.

Schedule:
    - retry_failed_webhook_deliveries: every 15 minutes
"""

from django.db import migrations

RETRY_TASK_NAME = "webhooks-retry-failed-deliveries"


def create_schedules(apps, schema_editor):
    IntervalSchedule = apps.get_model("django_celery_beat", "IntervalSchedule")
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")

    every_15_minutes, _ = IntervalSchedule.objects.get_or_create(
        every=15,
        period="minutes",
    )

    PeriodicTask.objects.get_or_create(
        name=RETRY_TASK_NAME,
        defaults={
            "task": "webhooks.tasks.retry_failed_webhook_deliveries",
            "interval": every_15_minutes,
            "enabled": True,
            "description": "Requeue failed webhook deliveries below WEBHOOK_MAX_ATTEMPTS",
        },
    )


def remove_schedules(apps, schema_editor):
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")
    PeriodicTask.objects.filter(name=RETRY_TASK_NAME).delete()


class Migration(migrations.Migration):

    dependencies = [
        ("webhooks", "0001_initial"),
        ("django_celery_beat", "0019_alter_periodictasks_options"),
    ]

    operations = [
        migrations.RunPython(create_schedules, remove_schedules),
    ]
