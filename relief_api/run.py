import uvicorn

from relief_inventory.config import get_settings


def main():
    settings = get_settings()
    uvicorn.run(
        "relief_api.main:app",
        host="0.0.0.0",
        port=8000,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
