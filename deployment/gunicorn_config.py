"""
Gunicorn settings for Moneyboard Finance.

Run with: gunicorn -c deployment/gunicorn_config.py
Every setting can be overridden from the environment (GUNICORN_*).
"""
import multiprocessing
import os


def _env_int(name, default):
    value = os.environ.get(name)
    return int(value) if value else default


APP_DIR = os.environ.get('MONEYBOARD_HOME', os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
LOG_DIR = os.path.join(APP_DIR, 'logs')
os.makedirs(LOG_DIR, exist_ok=True)

wsgi_app = 'app:create_app("production")'
chdir = APP_DIR

# Nginx terminates TLS and proxies to this socket
bind = os.environ.get('GUNICORN_BIND', '127.0.0.1:8000')

workers = _env_int('GUNICORN_WORKERS', multiprocessing.cpu_count() * 2 + 1)
if os.environ.get('RECORD_STORE_BACKEND') == 'memory':
    # Memory records live inside a single process
    workers = 1
timeout = _env_int('GUNICORN_TIMEOUT', 30)
graceful_timeout = 20
max_requests = 500
max_requests_jitter = 25

accesslog = os.path.join(LOG_DIR, 'gunicorn_access.log')
errorlog = os.path.join(LOG_DIR, 'gunicorn_error.log')
loglevel = os.environ.get('GUNICORN_LOG_LEVEL', 'info')
proc_name = 'moneyboard-finance'

# Request size limits; the largest form is a net-worth breakdown
limit_request_line = 4094
limit_request_fields = 200


def when_ready(server):
    server.log.info("Moneyboard Finance ready with %s workers", server.cfg.workers)


def post_fork(server, worker):
    server.log.info("Worker spawned (pid: %s)", worker.pid)


def worker_abort(worker):
    worker.log.warning("Worker %s aborted (timeout or failed boot)", worker.pid)
