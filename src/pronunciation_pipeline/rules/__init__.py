"""
Business rules for turning an alignment and a score into feedback.

This package contains:
- feedback.py: Remediation tips derived from the aligned words
- stars.py: Mapping of a 0-100 score onto a 1-3 star rating
"""
