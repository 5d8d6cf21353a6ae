"""
idscan: structured field extraction from Aadhaar and PAN card scans.
"""

__version__ = "1.0.0"
