"""Conversational agents built on the player statistics toolkit."""
