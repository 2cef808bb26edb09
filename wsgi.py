"""
WSGI entry point for the show advance static server.

Point your WSGI host at this file and set SHOW_ADVANCE_STATIC_ROOT (or
static_root in config.json) to the directory holding the app assets.
"""

import os
import sys

# Make the project importable when the host starts us from elsewhere
path = os.path.dirname(os.path.abspath(__file__))
if path not in sys.path:
    sys.path.insert(0, path)

# The 'application' variable is what WSGI servers look for
from web_app import app as application

if __name__ == "__main__":
    application.run()
