"""Lancer le serveur / Run the server: python -m vehicle_tracker."""

import uvicorn

from vehicle_tracker.config import settings
from vehicle_tracker.main import configure_logging


def main() -> None:
    configure_logging()
    uvicorn.run("vehicle_tracker.main:app", host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    main()
