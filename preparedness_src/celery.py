"""
Celery application configuration.

Schedules periodic cluster detection and report retention through
Celery beat.
"""

from celery import Celery

from .config import config

app = Celery(
    'preparedness',
    broker=config.CELERY_BROKER_URL,
    backend=config.CELERY_RESULT_BACKEND,
    include=['preparedness_src.tasks'],
)

app.conf.update(
    task_serializer='json',
    result_serializer='json',
    accept_content=['json'],
    timezone='UTC',
    beat_schedule={
        'run-outbreak-monitor': {
            'task': 'preparedness_src.tasks.run_outbreak_monitor',
            'schedule': float(config.POLL_INTERVAL),
        },
        'purge-expired-reports': {
            'task': 'preparedness_src.tasks.purge_expired_reports_task',
            'schedule': 3600.0,
        },
    },
)
