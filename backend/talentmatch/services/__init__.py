"""
Matching services: normalizer, scorers, ranker and record store.
"""
