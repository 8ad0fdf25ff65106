"""Gunicorn settings for serving wsgi:app."""

import os

bind = os.environ.get('GUNICORN_BIND', '0.0.0.0:8000')

# Each worker process keeps its own snapshot cache; concurrency comes from threads.
worker_class = 'gthread'
workers = int(os.environ.get('GUNICORN_WORKERS', 2))
threads = int(os.environ.get('GUNICORN_THREADS', 4))

# A request may make a mutation call plus a reload, each up to BACKEND_TIMEOUT.
timeout = int(os.environ.get('BACKEND_TIMEOUT', 30)) * 2 + 30
graceful_timeout = 30
keepalive = 5

os.makedirs('logs', exist_ok=True)
accesslog = 'logs/gunicorn-access.log'
errorlog = 'logs/gunicorn-error.log'
loglevel = os.environ.get('GUNICORN_LOG_LEVEL', 'info')
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s %(D)s'

proc_name = 'lesson-studio'
preload_app = True
max_requests = 1000
max_requests_jitter = 50
