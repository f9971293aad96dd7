"""Development settings for SchoolHub.

Extends base settings with developer-friendly defaults.
"""
from .base import *  # noqa
import os


DEBUG = True
ALLOWED_HOSTS = ["127.0.0.1", "localhost", "testserver"]

# Development secret key fallback (safe only for local use)
SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "dev-insecure-key-change-me")
