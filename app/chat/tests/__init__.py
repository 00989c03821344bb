"""
Tests for chat.

- test_services.py: Conversation creation and deal status mirroring
"""
