"""HTTP and WebSocket surface for replaying lift runs."""
