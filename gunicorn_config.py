import multiprocessing
from decouple import config

wsgi_app = "SeatDesk.wsgi:application"

bind = config("GUNICORN_BIND", default="0.0.0.0:8000")
backlog = 2048

# analytics streams hold a thread for as long as a dashboard is open
workers = config("GUNICORN_WORKERS", default=multiprocessing.cpu_count() * 2 + 1, cast=int)
worker_class = "gthread"
threads = config("GUNICORN_THREADS", default=4, cast=int)
max_requests = 1000
max_requests_jitter = 50

timeout = config("GUNICORN_TIMEOUT", default=120, cast=int)
keepalive = 2

accesslog = "-"
errorlog = "-"
loglevel = config("LOG_LEVEL", default="info").lower()
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s %(L)ss'

proc_name = "seatdesk_gunicorn"

preload_app = True
daemon = False
