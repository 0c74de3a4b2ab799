"""
EASi persistence layer
Blueprint registry.
"""
