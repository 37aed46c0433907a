"""HTTP and WebSocket host for game sessions."""
