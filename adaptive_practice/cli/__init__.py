"""
Terminal front end for adaptive practice.
"""
