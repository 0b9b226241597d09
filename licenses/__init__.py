"""
Licenses module - per-domain licenses and pending license requests.

This module handles:
- License entity, key generation and expiry
- LicenseRequest entity, manual and automatic registration
- Create, approve, reject, revoke, reactivate and delete handlers
- Domain events that drive remote pushes
"""
