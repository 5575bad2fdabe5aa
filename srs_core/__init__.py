"""
srs-core - spaced-repetition scheduling core.
"""
