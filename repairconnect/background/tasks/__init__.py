"""
Celery tasks package.
"""
