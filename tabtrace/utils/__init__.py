"""
tabtrace/utils/__init__.py

Logging and exceptions.
"""
