"""
Webservers module - Active web server activation and migration.

This module handles:
- Web app scopes and activation requests
- The active web server decision per scope
- Migration between web servers with rollback on failure
"""
