"""
Exam Question Extraction - Shared Library

This package contains the code shared by the extraction services:
- parse-questions HTTP function
- local testing scripts

It turns raw, inconsistently formatted exam text into scored multiple-choice
questions ready for review.
"""

__version__ = "0.1.0"
