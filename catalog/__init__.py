"""
Catalog module - licensable module definitions.

This module handles:
- ModuleDefinition entity
- Adding and removing catalog entries
- Cached catalog reads for verification
"""
