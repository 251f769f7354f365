import uvicorn

from dashboard.config import settings


def main():
    uvicorn.run("dashboard.main:app", host=settings.APP_HOST, port=settings.APP_PORT)


if __name__ == "__main__":
    main()
