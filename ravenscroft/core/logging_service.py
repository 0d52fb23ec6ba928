"""
Centralized logging service for the Ravenscroft site backend.
Provides structured logging into the document store's appLogs collection,
with the standard library logger as a fallback.
"""

import json
import logging
import traceback
from datetime import datetime
from flask import request, has_request_context, has_app_context, current_app
from .config import Config

_stdlib_logger = logging.getLogger('ravenscroft')


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def _get_store():
        """Document store of the running app, if any"""
        if not has_app_context():
            return None
        ext = current_app.extensions.get('ravenscroft')
        return getattr(ext, 'store', None)

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
        if ip_address and ',' in ip_address:
            ip_address = ip_address.split(',')[0].strip()

        user_agent = request.headers.get('User-Agent', '')
        return ip_address, user_agent, request.path

    @staticmethod
    def log(level, source, message, details=None, user_id=None):
        """
        Log a message to the document store

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (newsletter, contact, auth, etc.)
            message (str): Main log message
            details (str/dict): Additional details (will be JSON-encoded if dict)
            user_id (str): Optional user identifier
        """
        level = level.upper()
        _stdlib_logger.log(getattr(logging, level, logging.INFO), f"[{source}] {message}")

        store = LoggingService._get_store()
        if store is None:
            return

        try:
            ip_address, user_agent, request_path = LoggingService._get_request_context()

            if isinstance(details, dict):
                details = json.dumps(details, indent=2, default=str)

            store.create(Config.LOGS_COLLECTION, {
                'timestamp': datetime.now().isoformat(),
                'level': level,
                'source': source,
                'message': message,
                'details': details,
                'ip_address': ip_address,
                'user_agent': user_agent,
                'request_path': request_path,
                'user_id': user_id,
            })
        except Exception as e:
            # Fallback to console logging if the store fails
            _stdlib_logger.warning(f"Logging service error: {e}")
            if details:
                _stdlib_logger.warning(f"Details: {details}")

    @staticmethod
    def debug(source, message, details=None, user_id=None):
        LoggingService.log('DEBUG', source, message, details, user_id)

    @staticmethod
    def info(source, message, details=None, user_id=None):
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def log_api_call(source, endpoint, method='GET', status_code=200, details=None):
        """Log outbound API calls"""
        message = f"API {method} {endpoint} - Status: {status_code}"
        level = 'INFO' if 200 <= status_code < 400 else 'WARNING' if status_code < 500 else 'ERROR'
        LoggingService.log(level, source, message, details)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @staticmethod
    def recent(limit=50, level=None, source=None):
        """Most recent log entries, newest first"""
        store = LoggingService._get_store()
        if store is None:
            return []
        where = []
        if level:
            where.append(('level', '==', level.upper()))
        if source:
            where.append(('source', '==', source))
        return store.query(Config.LOGS_COLLECTION, where=where,
                           order_by='timestamp', descending=True, limit=limit)


def db_log(level, source, message, details=None):
    """Shortcut used by modules: db_log('info', 'newsletter', 'msg', {...})"""
    LoggingService.log(level, source, message, details)


# Convenience instance for easy importing
logger = LoggingService()
