#!/usr/bin/env python
"""
CrewDesk entry point.
Loads .env, builds the app, and starts the development server when run directly.
Gunicorn serves `run:app` in production.
"""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from crewdesk import create_app  # noqa: E402

app = create_app(os.environ.get('FLASK_ENV', 'development'))

if __name__ == '__main__':
    host = os.environ.get('FLASK_HOST', '127.0.0.1')
    port = int(os.environ.get('FLASK_PORT', 5000))
    debug = os.environ.get('FLASK_DEBUG', 'false').lower() == 'true'

    app.logger.info('CrewDesk API on http://%s:%s (env=%s, debug=%s)',
                    host, port, os.environ.get('FLASK_ENV', 'development'), debug)
    app.run(host=host, port=port, debug=debug)
