"""
Celery workers module.

Periodic session reconciliation and birthday announcements, scheduled
with Celery beat.

Dependencies: celery, firefli.configs
System role: Background task processing
"""

from celery import Celery
from celery.schedules import crontab

from firefli.configs import get_settings

settings = get_settings()
celery_config = settings.celery

celery_app = Celery(
    "firefli",
    broker=celery_config.broker_url,
    backend=celery_config.result_backend_url,
    include=["firefli.workers.tasks.reconcile", "firefli.workers.tasks.birthdays"],
)

celery_app.conf.update(
    task_serializer=celery_config.task_serializer,
    result_serializer=celery_config.result_serializer,
    accept_content=celery_config.accept_content,
    timezone=celery_config.timezone,
)

celery_app.conf.beat_schedule = {
    "reconcile_sessions": {
        "task": "firefli.reconcile_sessions",
        "schedule": float(settings.cron.reconcile_interval_seconds),
    },
    "announce_birthdays": {
        "task": "firefli.announce_birthdays",
        "schedule": crontab(hour=settings.cron.birthday_hour_utc, minute=0),
    },
}
