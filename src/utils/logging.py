"""Shared logging configuration."""
import os
import sys
import json
import traceback
from aws_lambda_powertools import Logger

def format_exception(exc_info):
    """Format exception info into a single line."""
    if exc_info is True:  # When exc_info=True is passed to logger.exception
        exc_info = sys.exc_info()

    if exc_info and isinstance(exc_info, tuple) and len(exc_info) == 3 and exc_info[0] is not None:
        trace = ''.join(traceback.format_exception(*exc_info))
        return trace.replace('\n', ' | ').strip()
    return None

class SingleLineLogger(Logger):
    """Logger that keeps tracebacks on one line of the structured record."""

    def exception(self, msg, *args, **kwargs):
        exc_info = kwargs.pop('exc_info', True)
        extra = kwargs.pop('extra', None) or {}
        extra['exception'] = format_exception(exc_info)
        kwargs['exc_info'] = False
        kwargs['extra'] = extra
        super().error(msg, *args, **kwargs)

logger = SingleLineLogger(
    service=os.environ.get('POWERTOOLS_SERVICE_NAME', 'cycle_engine'),
    level=os.environ.get('LOG_LEVEL', 'INFO'),
    json_serializer=json.dumps,
    use_rfc3339=True
)

logger.append_keys(
    function=os.environ.get('AWS_LAMBDA_FUNCTION_NAME'),
    version=os.environ.get('AWS_LAMBDA_FUNCTION_VERSION')
)
