"""
WSGI entry point
Used by Gunicorn in production
"""
import os

os.environ.setdefault('FLASK_ENV', 'production')

from ddl_to_er.web_app.app import create_app  # noqa: E402
from ddl_to_er.web_app.app_config import get_config  # noqa: E402

config = get_config()
if hasattr(config, 'validate'):
    config.validate()

# Object looked up by the WSGI server
application = create_app(config)
app = application

if __name__ == "__main__":
    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)
