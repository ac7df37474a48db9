# =============================================================================
# CrewDesk - Gunicorn Production Configuration
# Usage: gunicorn -c gunicorn.conf.py run:app
# =============================================================================
import os
import multiprocessing

bind = f"0.0.0.0:{os.environ.get('PORT', '8080')}"

# JSON API only: short requests, threads per worker
workers = int(os.environ.get('WEB_CONCURRENCY', min(multiprocessing.cpu_count() * 2 + 1, 4)))
threads = 2
worker_class = "gthread"

preload_app = True

timeout = 30
graceful_timeout = 30
keepalive = 5

# Logging (app logs are JSON on stdout)
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info")

# Recycle workers
max_requests = 1000
max_requests_jitter = 50

limit_request_line = 8190
limit_request_fields = 100

forwarded_allow_ips = os.environ.get("FORWARDED_ALLOW_IPS", "127.0.0.1")
