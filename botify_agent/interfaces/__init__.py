"""
Abstract interfaces for the Botify Agent system.

These interfaces define the contracts that concrete implementations
must adhere to, so services depend on abstractions and tests can
substitute doubles.

This package contains:
- Provider interfaces for external service adapters (LLM, Spotify, Telegram, storage)
- Repository interfaces for persisted authorizations and chat messages
- Service interfaces for the agent, auth and chat services
- Plugin interfaces for tools and the tool registry
"""
