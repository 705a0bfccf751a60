import os

# Bind to the port provided via the PORT environment variable, defaulting to
# 5000.
bind = f"0.0.0.0:{os.getenv('PORT', '5000')}"

# The listing cache lives in process memory, so every worker keeps its own
# copy and only sees revalidations made by requests it served.  A single
# worker with threads keeps the cache coherent.
workers = 1
threads = int(os.getenv("GUNICORN_THREADS", "4"))
timeout = 30

wsgi_app = "run:app"
