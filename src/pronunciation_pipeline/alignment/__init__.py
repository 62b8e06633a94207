"""
Word-level alignment between a target sentence and a speech transcript.

This package contains:
- matching.py: Exact and fuzzy (edit-distance) word pairing rules
- word_alignment.py: Tokenization, the alignment DP and its summary
"""
