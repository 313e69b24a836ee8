"""
Client modules for external services.

Provides the interface to the Roboflow hosted inference API.
"""

from inspection_api.clients.roboflow import (
    MalformedResponseError,
    RoboflowClient,
    remote_error_message,
)


__all__ = [
    'MalformedResponseError',
    'RoboflowClient',
    'remote_error_message',
]
