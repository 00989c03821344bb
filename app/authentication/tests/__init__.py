"""
Tests for accounts.

- test_models.py: User manager, Profile slug and display name
- test_signals.py: Profile auto-creation
"""
