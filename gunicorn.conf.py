import os

bind = f"0.0.0.0:{os.getenv('PORT', 8000)}"
workers = int(os.getenv('WEB_CONCURRENCY', 2))
worker_class = "uvicorn.workers.UvicornWorker"
wsgi_app = "eventpro.main:app"
worker_connections = 1000
max_requests = 1000
max_requests_jitter = 100
timeout = int(os.getenv('GUNICORN_TIMEOUT', 60))
accesslog = "-"
loglevel = os.getenv('LOG_LEVEL', 'info').lower()
preload_app = True
