"""
Media storage implementations.
"""
