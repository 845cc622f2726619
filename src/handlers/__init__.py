"""
Lambda handlers package for AWS Lambda functions.
"""
from .prediction import handler
from .partner_view import handler as partner_view_handler

__all__ = ["handler", "partner_view_handler"]
