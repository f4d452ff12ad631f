import json
import logging
import os
from pathlib import Path

from fastapi import HTTPException, Request, status
from pydantic import ValidationError

from chain_registry.data.registry import RegistryHandle, RegistrySnapshot
from chain_registry.domain.errors import RegistryNotLoadedError
from chain_registry.domain.models import RegistryConfig

logger = logging.getLogger(__name__)

DATA_ROOT_ENV_VAR = "CHAIN_REGISTRY_DATA_DIR"
CONFIG_ENV_VAR = "CHAIN_REGISTRY_CONFIG"
_REPO_ROOT = Path(__file__).resolve().parents[2]
_DEFAULT_DATA_DIR = _REPO_ROOT / "data"


def get_data_dir() -> Path:
    """
    Determine the registry root.

    Priority:
    1. Environment variable CHAIN_REGISTRY_DATA_DIR
    2. '<project root>/data'
    """
    env_path = os.environ.get(DATA_ROOT_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return _DEFAULT_DATA_DIR


def load_registry_config() -> RegistryConfig:
    """
    Load RegistryConfig from the file named by CHAIN_REGISTRY_CONFIG.

    Falls back to defaults when the variable is unset or the file is unusable.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if not env_path:
        return RegistryConfig()

    path = Path(env_path).expanduser()
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        return RegistryConfig(**raw)
    except (OSError, ValueError, TypeError, ValidationError) as e:
        logger.warning(f"Ignoring registry config {path}, using defaults: {e}")
        return RegistryConfig()


def get_registry_handle(request: Request) -> RegistryHandle:
    return request.app.state.registry


def get_snapshot(request: Request) -> RegistrySnapshot:
    try:
        return get_registry_handle(request).current()
    except RegistryNotLoadedError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Registry is not loaded",
        )
