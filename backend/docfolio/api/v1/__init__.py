from flask import Blueprint
from docfolio.content_store import ContentStore

# Create the versioned blueprint
v1_bp = Blueprint("v1", __name__)

store = ContentStore()

# Import route modules so they register with v1_bp
from . import health
from . import auth
from . import navigation
from . import pages
from . import admin
