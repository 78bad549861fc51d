"""
Adapters for external systems and services.

These adapters implement the interfaces defined in botify_agent.interfaces
and provide concrete implementations for Spotify, Telegram, OpenAI and
MongoDB.
"""
