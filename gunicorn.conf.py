"""
Gunicorn configuration for the appointment webhook.
"""
import os

bind = f"0.0.0.0:{os.getenv('PORT', '8080')}"

# Each request blocks on up to two sequential Shopify calls
workers = int(os.getenv('GUNICORN_WORKERS', '2'))
worker_class = 'sync'

# Must exceed two back-to-back SHOPIFY_TIMEOUT waits (default 30s each)
timeout = int(os.getenv('GUNICORN_TIMEOUT', '75'))
graceful_timeout = 30

accesslog = '-'
errorlog = '-'
loglevel = os.getenv('LOG_LEVEL', 'info').lower()

proc_name = 'appointment-sync'
