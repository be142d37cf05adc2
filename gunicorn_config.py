"""
Gunicorn configuration
Usage: gunicorn -c gunicorn_config.py wsgi:application
"""
import multiprocessing
import os

# Server socket
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:5001")
backlog = 2048

# Workers
workers = int(os.getenv("GUNICORN_WORKERS", multiprocessing.cpu_count() * 2 + 1))
worker_class = "sync"
worker_connections = 1000
# must exceed VISION_TIMEOUT
timeout = int(os.getenv("GUNICORN_TIMEOUT", "120"))
keepalive = 2

# Restart workers periodically
max_requests = 1000
max_requests_jitter = 50
preload_app = True

# Logging
accesslog = os.getenv("GUNICORN_ACCESS_LOG", "-")
errorlog = os.getenv("GUNICORN_ERROR_LOG", "-")
loglevel = os.getenv("LOG_LEVEL", "info").lower()
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s"'

# Process naming
proc_name = "ddl_to_er_app"

daemon = False
