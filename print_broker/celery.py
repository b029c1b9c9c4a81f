import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "print_broker.settings")

app = Celery("print_broker")

app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks()
