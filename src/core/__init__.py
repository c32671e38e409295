"""
Core matrix type, numerical policy, input contracts and result models.

This package is independent of any presentation layer: it never logs,
prints or performs I/O beyond loading its bundled JSON schemas.
"""
