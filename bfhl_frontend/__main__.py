import uvicorn

from bfhl_frontend.config import get_settings


def main() -> None:
    settings = get_settings()
    # log_config=None keeps the dictConfig applied by bfhl_frontend.main
    uvicorn.run("bfhl_frontend.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
