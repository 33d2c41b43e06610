import os

APP_ENV = os.getenv("APP_ENV", "production")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 3000))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", None)

CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]
SOCKETIO_PATH = os.getenv("SOCKETIO_PATH", "socket.io")

MIN_PLAYER_NAME_LENGTH = int(os.getenv("MIN_PLAYER_NAME_LENGTH", 2))
MIN_ROOM_NAME_LENGTH = int(os.getenv("MIN_ROOM_NAME_LENGTH", 2))


def is_development() -> bool:
    return APP_ENV == "development"
