"""Run the Tracklink API with uvicorn."""

import uvicorn
from dotenv import load_dotenv

from tracklink.config import Settings


def main():
    load_dotenv()
    settings = Settings.from_env()
    uvicorn.run("tracklink.api.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
