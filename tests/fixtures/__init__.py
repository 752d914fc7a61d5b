"""
Test fixtures for the orchestration layer.

Contains sample data for testing:
- decision_makers.json: Five valid decision-maker entries for a cloud
  monitoring requirement (Technology industry)
"""
