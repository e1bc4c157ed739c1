"""
Web Server Activation Service Django project.
"""
