"""
Celery application configuration and setup.

Used by deployments that run the sweep out of process instead of through the
in-process worker manager.
"""

from celery import Celery
from celery.schedules import crontab

from repairconnect.config.settings import settings

celery_app = Celery(
    "repairconnect",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["repairconnect.background.tasks.cleanup_jobs"],
)

celery_app.conf.update(
    task_routes={
        "reclaim_archived_requests_task": {"queue": "maintenance"},
    },
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=100,
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    result_expires=3600,
    task_default_queue="default",
    beat_schedule={
        # Hourly, on the hour
        "reclaim-archived-requests": {
            "task": "reclaim_archived_requests_task",
            "schedule": crontab(minute=0),
            "options": {"queue": "maintenance"},
        },
    },
    task_soft_time_limit=settings.CELERY_TASK_SOFT_TIME_LIMIT,
    task_time_limit=settings.CELERY_TASK_TIME_LIMIT,
    worker_hijack_root_logger=False,
)

if __name__ == "__main__":
    celery_app.start()
