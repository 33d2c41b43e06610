"""In-memory room lobby with real-time membership sync over Socket.IO."""

__version__ = "0.1.0"
