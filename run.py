import os
from dotenv import load_dotenv

#NOTE: .env must be loaded before the config classes read the environment
load_dotenv()

from app import create_app  # noqa: E402

config_name = os.getenv('FLASK_ENV', 'development')

app = create_app(config_name)

if __name__ == '__main__':
    # production runs behind a WSGI server (gunicorn etc.)
    app.run(
        host='0.0.0.0',
        port=int(os.getenv('PORT', 5000)),
        debug=(config_name == 'development')
    )
