"""
Serverless function entry point for the tally service
"""
import os
import sys

# Add parent directory to path so we can import app
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Serverless filesystems are read-only apart from /tmp
os.environ.setdefault("DATABASE_URL", "sqlite:////tmp/tally.db")

from app import app  # noqa: E402

# The runtime expects the Flask app to be exported directly as a WSGI application
