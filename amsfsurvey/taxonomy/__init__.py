"""
See COPYRIGHT.md for copyright information.
"""
