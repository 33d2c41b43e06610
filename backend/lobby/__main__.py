import uvicorn

from lobby.config import HOST, LOG_FILE, LOG_LEVEL, PORT
from lobby.logging_config import get_logger, setup_logging


def main() -> None:
    setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)
    logger = get_logger(__name__)
    logger.info(f"Starting room lobby server on {HOST}:{PORT}")
    uvicorn.run("lobby.main:create_asgi_app", factory=True, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
