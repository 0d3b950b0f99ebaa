#!/usr/bin/env python3
"""Development entry point for the padel tournaments API."""
import os
from padel_api.app import create_app

config_name = os.environ.get('FLASK_ENV', 'development')
app = create_app(config_name)

if __name__ == '__main__':
    port = int(os.environ.get('PORT', 3000))
    print(f"Padel tournaments API listening on http://localhost:{port} ({config_name})")
    app.run(host='0.0.0.0', port=port, debug=(config_name == 'development'))
