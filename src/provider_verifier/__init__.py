import os
from pathlib import Path

from provider_verifier.libraries.common.logging import get_logger, setup_logging

# For internal use only
_PROJECT_ROOT_DIR = Path(__file__).parent.parent.parent.resolve()
_PACKAGE_DIR = Path(__file__).parent.resolve()
_CONFIG_DIR = _PACKAGE_DIR / "cfg"


DEFAULT_ENV = os.environ.get("DEFAULT_ENV", "dev")
DEFAULT_PACT_DIR = Path(os.environ.get("PACT_DIR", _PROJECT_ROOT_DIR / "pacts"))

CONSUMER_NAME = "jmarie"
PROVIDER_NAME = "loginprovider"


def get_config_dir() -> Path:
    """Return the current config directory"""
    return _CONFIG_DIR


setup_logging(get_config_dir() / "logging.yaml")
logger = get_logger(__name__)
