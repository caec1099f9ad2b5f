"""
Utility functions for Lambda handler operations.

This package contains reusable service functions for configuration,
event parsing, response building, templates and logging.
"""

__all__ = ['config', 'events', 'logging_config', 'responses', 'templates']
