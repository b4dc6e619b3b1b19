"""
Session Logging Module

Provides per-session logging capabilities for the workflow editor.
"""
from workflow_editor.logging.session_logger import (
    SessionLogger,
    configure_logging,
    get_session_logger,
)

__all__ = ['SessionLogger', 'configure_logging', 'get_session_logger']
