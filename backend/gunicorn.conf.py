"""
Gunicorn configuration for the Pip launchpad API
"""
import os

# Server socket
bind = os.getenv("LAUNCHPAD_BIND", "127.0.0.1:8000")
backlog = 2048

# Worker processes
# One process only: the admin signer's nonce is serialized by a per-process lock,
# so a second worker would race it for the same pending nonce.
workers = 1
worker_class = "uvicorn.workers.UvicornWorker"
worker_connections = 1000
# Deploys wait for receipts; keep above LAUNCHPAD_TX_RECEIPT_TIMEOUT_SECONDS
timeout = 180
keepalive = 5

# Logging
accesslog = os.getenv("LAUNCHPAD_ACCESS_LOG", "-")
errorlog = os.getenv("LAUNCHPAD_ERROR_LOG", "-")
loglevel = "info"
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# Process naming
proc_name = "pip-launchpad"

# Server mechanics
daemon = False
pidfile = None
user = None
group = None
tmp_upload_dir = None

capture_output = True
enable_stdio_inheritance = True

preload_app = True

graceful_timeout = 30

reload = False
