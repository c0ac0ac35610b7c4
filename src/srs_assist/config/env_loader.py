"""Optional .env file loading.

Nothing is read from disk implicitly: a file is loaded only when a caller
names it, and values already present in the environment win.
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

log = logging.getLogger(__name__)


def load_env_file(env_file: str | Path) -> bool:
    """Load ``KEY=VALUE`` pairs from ``env_file`` into ``os.environ``.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    env_path = Path(env_file)
    if not env_path.is_file():
        raise FileNotFoundError(f"Environment file not found: {env_path}")

    loaded = load_dotenv(env_path, override=False)
    log.debug("Loaded environment file %s (changed=%s)", env_path, loaded)
    return loaded
