import uvicorn

from configs.env_config import Env


def run() -> None:
    Env.validate()
    uvicorn.run(
        "api.app:create_app",
        factory=True,
        host=Env.SERVER_HOST,
        port=int(Env.SERVER_PORT),
        server_header=False,
        log_level="warning",
    )


if __name__ == "__main__":
    run()
