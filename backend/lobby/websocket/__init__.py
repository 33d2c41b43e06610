"""Real-time membership: per-connection gateway, room broadcasts, Socket.IO wiring."""
