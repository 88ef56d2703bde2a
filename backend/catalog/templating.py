"""
Catalog Backend — Template Environment
========================================

What:  The shared Jinja2Templates instance used by routes and error handlers.
Why:   One environment means one autoescape policy and one set of globals
       for every page.
"""

from fastapi.templating import Jinja2Templates

from catalog import __version__
from catalog.config import settings

templates = Jinja2Templates(directory=settings.templates_dir)
templates.env.globals["app_version"] = __version__
