import uvicorn

from . import config


def main():
    uvicorn.run("kitchen.app:app", host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
