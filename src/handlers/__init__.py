"""
Lambda handlers package for AWS Lambda functions.
"""
from .entries import handler as entries_handler
from .prediction import handler as prediction_handler
from .sync import handler as sync_handler

__all__ = ["entries_handler", "prediction_handler", "sync_handler"]
