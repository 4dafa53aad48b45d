"""
Celery application for the gmao project.
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("gmao")

# All celery settings are read from Django settings with the CELERY_ prefix
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks(["core.common"])
