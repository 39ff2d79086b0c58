"""
Payment gateway implementations.
"""
