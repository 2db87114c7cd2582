from pathlib import Path

from dotenv import load_dotenv


def load_env() -> None:
    """Load .env from the current directory if present.

    Existing environment variables win over values in the file.
    """
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path, override=False)
