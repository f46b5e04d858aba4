"""
CLI Module

Console entry points wiring stdin/stdout JSON to the backup resource verbs.
"""

from .main import run, execute, build_client, check_main, in_main, out_main, main

__all__ = [
    'run',
    'execute',
    'build_client',
    'check_main',
    'in_main',
    'out_main',
    'main'
]
