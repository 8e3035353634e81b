"""Core components: exceptions, protocol, sessions, tool system and workspaces."""
