"""Celery application configuration."""

from celery import Celery

from mangia.config import get_settings

settings = get_settings()

app = Celery(
    "mangia",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["mangia.tasks.pantry_events"],
)

app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_ignore_result=True,
    task_publish_retry=False,  # Event logging must not hold up the caller
    task_time_limit=60,
    task_soft_time_limit=45,
)
