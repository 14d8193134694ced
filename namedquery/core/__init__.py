"""
Core: configuration, errors, diagnostics, caching, pool and transactions.
"""
