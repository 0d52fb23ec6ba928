"""
Ravenscroft Core
================

Core utilities and shared functionality for Ravenscroft modules.
"""

from .config import Config
from .database import DocumentStore, DocumentStoreError, DocumentNotFound
from .errors import (
    CallableError, InvalidArgument, Unauthenticated, PermissionDenied,
    NotFound, Internal, register_error_handlers
)
from .logging_service import LoggingService, logger, db_log

__all__ = [
    'Config', 'DocumentStore', 'DocumentStoreError', 'DocumentNotFound',
    'CallableError', 'InvalidArgument', 'Unauthenticated', 'PermissionDenied',
    'NotFound', 'Internal', 'register_error_handlers',
    'LoggingService', 'logger', 'db_log',
]
