from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Dict, Any
from pathlib import Path


class Settings(BaseSettings):
    # Chunking defaults
    CLEAN_MODE: str = "unicode"  # unicode|ascii|none
    OVERLAP_TOKENS: int = 200  # context carried into the next chunk
    HEADROOM: float = 0.15  # fraction of the model limit left unused
    MAX_TOKENS_OVERRIDE: Optional[int] = None  # replaces the registry limit

    # Extra model keys merged over the built-in registry
    MODEL_LIMITS: Dict[str, int] = {}

    # Observability & UI
    LOG_FORMAT: str = "auto"  # json|plain|auto
    NO_COLOR: bool = False  # Disable colored output

    TOP_WORDS: int = Field(
        default=10,
        description="Number of frequent words listed by the estimate command",
    )
    model_config = SettingsConfigDict(
        env_prefix="CHATTOOLS_", env_file=".env", env_file_encoding="utf-8"
    )

    @classmethod
    def load_config(cls, config_file: Optional[str] = None) -> "Settings":
        """Load settings with config file -> env -> CLI precedence."""
        config_data: Dict[str, Any] = {}

        # Find config file
        if config_file:
            config_path: Optional[Path] = Path(config_file)
        else:
            # Auto-discover .chattools.{yaml,yml,toml}
            for ext in ["yaml", "yml", "toml"]:
                config_path = Path(f".chattools.{ext}")
                if config_path.exists():
                    break
            else:
                config_path = None

        if config_path and config_path.exists():
            if config_path.suffix in [".yaml", ".yml"]:
                import yaml  # type: ignore[import-untyped]

                with open(config_path) as f:
                    config_data = yaml.safe_load(f) or {}
            elif config_path.suffix == ".toml":
                import tomllib

                with open(config_path, "rb") as f:
                    config_data = tomllib.load(f)

        # Config file keys are case-insensitive
        config_data = {key.upper(): value for key, value in config_data.items()}

        # Environment variables win over file values
        env_settings = cls()
        for name in env_settings.model_fields_set:
            config_data.pop(name, None)
        return cls(**config_data)


# Default settings - will be replaced by load_config() during CLI startup
SETTINGS = Settings()
