import os
from dotenv import load_dotenv

load_dotenv()

class Env:
    # HTTP server
    SERVER_HOST = os.getenv("DM_SERVER_HOST", "0.0.0.0")
    SERVER_PORT = os.getenv("DM_SERVER_PORT", "9095")

    # Auth / access
    USERNAME = os.getenv("DM_USERNAME")
    PASSWORD = os.getenv("DM_PASSWORD")
    ALLOWED_IPS = os.getenv("DM_ALLOWED_IPS", "")
    CORS_ORIGIN = os.getenv("DM_CORS_ORIGIN", "*")
    RATE_LIMIT = os.getenv("DM_RATE_LIMIT", "5/second")

    # Logging
    LOG_LEVEL = os.getenv("DM_LOG_LEVEL", "info")
    LOG_DIR = os.getenv("DM_LOG_DIR", "logs")
    DISCORD_WEBHOOK = os.getenv("DM_DISCORD_WEBHOOK", "")

    # Docker runtime / collector
    DOCKER_BINARY = os.getenv("DM_DOCKER_BINARY", "docker")
    MAX_CONCURRENCY = os.getenv("DM_MAX_CONCURRENCY", "10")
    QUERY_TIMEOUT = os.getenv("DM_QUERY_TIMEOUT", "")
    FAILURE_POLICY = os.getenv("DM_FAILURE_POLICY", "all_or_nothing")

    @classmethod
    def validate(cls):
        required_vars = {
            "DM_USERNAME": cls.USERNAME,
            "DM_PASSWORD": cls.PASSWORD,
        }

        missing_vars = [var for var, value in required_vars.items() if not value]
        if missing_vars:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing_vars)}"
            )
