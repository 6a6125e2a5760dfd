import os
from celery import Celery
from celery.schedules import crontab
from dotenv import load_dotenv

from betsmoke.core.config import settings

load_dotenv()

broker = os.getenv("REDIS_URL", "redis://localhost:6379/0")
backend = broker

celery = Celery("betsmoke_workers", broker=broker, backend=backend, include=["workers.tasks"])
celery.conf.task_routes = {
    "tasks.sync_sportsmonks_types": {"queue": "sync"},
}

# Beat schedule for periodic tasks
celery.conf.beat_schedule = {
    "sync-sportsmonks-types-weekly": {
        "task": "tasks.sync_sportsmonks_types",
        "schedule": crontab(
            hour=settings.TYPES_SYNC_CRON_HOUR,
            minute=0,
            day_of_week=settings.TYPES_SYNC_CRON_DAY_OF_WEEK,
        ),
    },
}
