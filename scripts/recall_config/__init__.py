"""
Configuration for the session recall engine.

Loads config/recall_config.json (falling back to built-in defaults) and
applies environment overrides. Import the shared instance:

    from recall_config import config
"""

from .config import RecallConfig, config

__all__ = [
    'RecallConfig',
    'config',
]

__version__ = '1.0.0'
