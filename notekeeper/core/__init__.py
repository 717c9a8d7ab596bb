"""
Core Infrastructure.

Configuration loading, structured logging and the exception hierarchy
shared by every other package.
"""
