import os
from docfolio import create_app

app = create_app(os.getenv("FLASK_CONFIG", "development"))
