#!/usr/bin/env python3
"""
Main entry point for the Hockey Coach substitution schedule web application.

This script configures logging and launches the Flask-based web server.
"""
import logging
import os

from hockeycoach.ui.web_app import run_web_app
from hockeycoach.utils.constants import DEFAULT_WEB_HOST, DEFAULT_WEB_PORT

if __name__ == "__main__":
    logging.basicConfig(
        level=os.environ.get("HOCKEYCOACH_LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_web_app(
        host=os.environ.get("HOCKEYCOACH_HOST", DEFAULT_WEB_HOST),
        port=int(os.environ.get("HOCKEYCOACH_PORT", DEFAULT_WEB_PORT)),
    )
