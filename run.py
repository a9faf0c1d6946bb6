"""
Appointment tag sync entry point.

    gunicorn -c gunicorn.conf.py run:app     # deployment
    FLASK_ENV=development python run.py      # local dev server
"""
import logging
import os

from appointment_sync import create_app

app = create_app(os.getenv('FLASK_ENV', 'production'))

logger = logging.getLogger('appointment_sync.run')
logger.info(f"Serving {len(list(app.url_map.iter_rules()))} routes")

if __name__ == '__main__':
    app.run(
        host='0.0.0.0',
        port=int(os.getenv('PORT', 5000)),
        debug=app.config.get('DEBUG', False)
    )
