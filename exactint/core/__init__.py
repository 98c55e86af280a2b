"""
Core: value type, digit store, engines and configuration.

The modules here have no knowledge of Python operator dispatch beyond
BigInteger's delegation to the default engine.
"""
