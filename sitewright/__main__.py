# sitewright/__main__.py
"""
Entry point for sitewright.
"""
from sitewright import init_application
from sitewright.cli import app

if __name__ == "__main__":
    init_application()
    app()
