"""
Django settings module.

This package contains environment-specific settings:
- base.py: Base settings shared across all environments
- dev.py: Development environment settings, in-memory demo server
- test.py: Test environment settings
- prod.py: Production environment settings, connection factory from environment
"""
