"""
Plugin system for the Botify Agent.

This package provides the tool registry, the tool parameter schemas and the
Spotify tools the agent can call.
"""
