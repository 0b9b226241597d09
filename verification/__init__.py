"""
Verification module - the public license check.

This module handles:
- The verification decision (pending, auto-request, key validation)
- The append-only API log
"""
