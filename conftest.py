"""Configure test suite environment"""
import os
import sys

project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)

# Tests run against the in-memory store unless a test selects another backend
os.environ.setdefault("TRACKER_STORE", "memory")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "period_tracker")
os.environ.setdefault("LOG_LEVEL", "WARNING")
