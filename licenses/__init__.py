"""
Licenses module - License registry.

This module handles:
- License entity, user roster and device binding
- License lifecycle (issue, activate, deactivate, extend, delete)
- License validation by key, device and user login
- JSON file persistence of the registry
"""
