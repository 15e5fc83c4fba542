"""Configure test suite environment"""
import os
import sys

# Make the src package importable without installing the project
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)

# Handlers build their tracer and clients at import time
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "cycle-tracker-test")
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-1")
os.environ.setdefault("TRACKER_TABLE_NAME", "TrackerTable-test")
