"""
Pure functions behind the SDK classes.
"""
