import os
from celery import Celery

# Point Celery at the Django settings
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "wildsite.settings")

app = Celery("wildsite")

# Read CELERY_* settings from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# Picks up donations/tasks.py
app.autodiscover_tasks()
