"""
Utility Modules for webtts.

    - timeit.py: Performance measurement utilities
"""
