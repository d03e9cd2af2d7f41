"""
Core module for shared service infrastructure.

This module contains:
- Domain exceptions and value objects
- Prometheus metrics
- Middleware components
- Health and metrics views
"""
