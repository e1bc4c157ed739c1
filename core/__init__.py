"""
Core module for shared domain infrastructure.

This module contains:
- Domain events, exceptions and value objects
- In-memory event bus and audit log handlers
- Activation log context
- Prometheus metrics
"""
