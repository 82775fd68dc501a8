"""Run the API with uvicorn: ``python -m users_api``."""
import uvicorn

from users_api.app import create_app
from users_api.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(create_app(), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
