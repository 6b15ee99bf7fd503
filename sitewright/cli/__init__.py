"""
CLI for sitewright.
"""
from sitewright.cli.main import app

__all__ = ['app']
