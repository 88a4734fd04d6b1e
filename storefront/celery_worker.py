# storefront/celery_worker.py
from celery import Celery

from storefront.utils.settings import (
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
    CELERY_TASK_ALWAYS_EAGER,
)

celery_app = Celery(
    "storefront",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# Explicite importuj taski, zeby worker je zarejestrowal
celery_app.conf.imports = (
    "storefront.services.notification_service",
)

#eager = taski wykonywane od razu w procesie (dev / testy, bez brokera)
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER

celery_app.conf.timezone = "UTC"
