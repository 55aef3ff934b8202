# chatboard/core/config.py
import os
from typing import List
from dotenv import load_dotenv


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """
    Setup environment variables.
        - HOST / PORT where uvicorn binds
        - API_PREFIX the prefix of the REST routes
        - GRAPHQL_PATH the path of the GraphQL endpoint
        - GRAPHIQL serve the GraphiQL IDE on GET requests to GRAPHQL_PATH
        - CORS_ORIGINS comma separated list of allowed origins ("*" for any)
    """

    # Load environment variables from the .env file
    load_dotenv()

    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    API_PREFIX: str = os.getenv("API_PREFIX", "/api")
    GRAPHQL_PATH: str = os.getenv("GRAPHQL_PATH", "/graphql")
    GRAPHIQL: bool = _as_bool(os.getenv("GRAPHIQL", "true"))

    CORS_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]

settings = Settings()
