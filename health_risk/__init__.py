"""Health-risk scoring engine.

This package contains the vitals domain models, the rule-based risk classifier
and the dataset loader, isolated from any web or storage layer so they stay
easy to test and reason about.
"""
