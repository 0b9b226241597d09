"""
Core module shared by the license manager apps.

This module contains:
- Domain names, value objects and the exception hierarchy
- The in-process event bus and its push and audit subscribers
- Cache adapter, metrics, tracing and health views
"""
