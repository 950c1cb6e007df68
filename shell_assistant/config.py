import getpass
import json
import logging
import os
import platform

from dataclasses import asdict, dataclass, field
from typing import Dict, Optional

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"
CONFIG_DIR_NAME = "shelp"
ENV_PREFIX = "SHELP"

DEFAULT_MAX_TOKENS = 1024
DEFAULT_PROVIDER = "gemini"

DEFAULT_MODELS: Dict[str, str] = {
    "openai": "gpt-4o-mini",
    "gemini": "gemini-2.0-flash",
    "claude": "claude-3-5-sonnet-latest",
}


@dataclass
class LLMConfig:
    provider: str = ""
    api_key: str = ""
    model: str = ""


@dataclass
class Config:
    """Settings loaded once at startup and passed to whoever needs them."""

    os: str = ""
    user: str = ""
    llm: LLMConfig = field(default_factory=LLMConfig)
    max_tokens: int = 0
    shell: str = ""

    @classmethod
    def from_dict(cls, data: Dict) -> "Config":
        llm_data = data.get("llm") or {}
        if not isinstance(llm_data, dict):
            raise ConfigError("The 'llm' section of the config file must be an object.")

        try:
            max_tokens = int(data.get("max_tokens") or 0)
        except (TypeError, ValueError):
            raise ConfigError(f"Invalid max_tokens value: {data.get('max_tokens')!r}")

        return cls(
            os=str(data.get("os") or ""),
            user=str(data.get("user") or ""),
            llm=LLMConfig(
                provider=str(llm_data.get("provider") or "").strip().lower(),
                api_key=str(llm_data.get("api_key") or "").strip(),
                model=str(llm_data.get("model") or "").strip(),
            ),
            max_tokens=max_tokens,
            shell=str(data.get("shell") or "").strip(),
        )


def api_key_env_var(provider: str) -> str:
    return f"{ENV_PREFIX}_{provider.upper()}_API_KEY"


def detect_os() -> str:
    return platform.system().lower() or "linux"


def detect_user() -> str:
    user = os.getenv("USER") or os.getenv("USERNAME")
    if user:
        return user
    try:
        return getpass.getuser()
    except (OSError, KeyError):
        return ""


def user_config_dir() -> str:
    if os.name == "nt" and os.getenv("APPDATA"):
        base = os.environ["APPDATA"]
    else:
        base = os.getenv("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return os.path.join(base, CONFIG_DIR_NAME)


def _default_config() -> Config:
    return Config(
        os=detect_os(),
        user=detect_user(),
        llm=LLMConfig(provider=DEFAULT_PROVIDER, model=DEFAULT_MODELS[DEFAULT_PROVIDER]),
        max_tokens=DEFAULT_MAX_TOKENS,
    )


def ensure_config_file(cwd: Optional[str] = None, config_dir: Optional[str] = None) -> str:
    """
    Returns the path of the config file to use.

    A `config.json` in the working directory wins. Otherwise the per-user file is used,
    and it is created with default values the first time.
    """
    local_path = os.path.join(cwd or os.getcwd(), CONFIG_FILE_NAME)
    if os.path.isfile(local_path):
        return local_path

    config_dir = config_dir or user_config_dir()
    config_path = os.path.join(config_dir, CONFIG_FILE_NAME)
    if not os.path.exists(config_path):
        try:
            os.makedirs(config_dir, exist_ok=True)
            with open(config_path, "w", encoding="utf-8") as config_file:
                json.dump(asdict(_default_config()), config_file, indent=4)
        except OSError as e:
            raise ConfigError(f"Could not create default config file '{config_path}': {e}") from e
        logger.warning("Created a default configuration file at %s", config_path)

    return config_path


def _validate_and_set_defaults(config: Config) -> Config:
    if config.max_tokens <= 0:
        config.max_tokens = DEFAULT_MAX_TOKENS

    if not config.llm.provider:
        raise ConfigError("LLM provider must be specified.")

    if config.llm.provider not in DEFAULT_MODELS:
        raise ConfigError(f"Unsupported LLM provider: {config.llm.provider}")

    if not config.llm.model:
        config.llm.model = DEFAULT_MODELS[config.llm.provider]

    if not config.llm.api_key:
        env_var = api_key_env_var(config.llm.provider)
        config.llm.api_key = os.getenv(env_var, "").strip()
        if not config.llm.api_key:
            raise ConfigError(
                f"API key not found in config or environment variable {env_var}"
            )

    if not config.os:
        config.os = detect_os()
    if not config.user:
        config.user = detect_user()

    return config


def load_config(cwd: Optional[str] = None, config_dir: Optional[str] = None) -> Config:
    """Finds, reads and validates the configuration file."""
    config_path = ensure_config_file(cwd, config_dir)
    logger.debug("Loading configuration from %s", config_path)

    try:
        with open(config_path, "r", encoding="utf-8") as config_file:
            data = json.load(config_file)
    except OSError as e:
        raise ConfigError(f"Error reading config file '{config_path}': {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Error parsing config file '{config_path}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{config_path}' must contain a JSON object.")

    return _validate_and_set_defaults(Config.from_dict(data))
