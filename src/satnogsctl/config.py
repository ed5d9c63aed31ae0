from pathlib import Path
from typing import Any, Literal

import envyaml
import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict, YamlConfigSettingsSource
from pydantic_settings.sources.types import DEFAULT_PATH, PathType

from satnogsctl.errors import ConfigurationError
from satnogsctl.model import DEFAULT_API_URL, DEFAULT_SATELLITES, Satellite

TOKEN_ENV_VAR = "SATNOGS_API_TOKEN"


class EnvYamlConfigSettingsSource(YamlConfigSettingsSource):
    """YAML settings with `${VAR}` placeholders expanded from the environment and the dotenv file."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        *,
        yaml_file: PathType | None = DEFAULT_PATH,
        yaml_file_encoding: str | None = None,
        env_file: Path | str | None = None,
    ):
        self.env_file = env_file or settings_cls.model_config.get("env_file")
        super().__init__(settings_cls, yaml_file=yaml_file, yaml_file_encoding=yaml_file_encoding)

    def _read_file(self, file_path: Path) -> dict[str, Any]:
        if not Path(file_path).is_file():
            return {}
        env_file = self.env_file if self.env_file and Path(self.env_file).is_file() else None
        # strict mode: an unset ${VAR} raises ValueError
        return dict(envyaml.EnvYAML(file_path, env_file, flatten=False))


class SatnogsCtlSettings(BaseSettings):
    """Run configuration, read once at startup and passed down explicitly."""

    model_config = SettingsConfigDict(
        yaml_file="config.yml",
        env_file=".env",
        env_prefix="SATNOGS_",
        extra="ignore",
    )

    api_token: str | None = None
    api_url: str = DEFAULT_API_URL
    satellites: list[Satellite] = Field(default_factory=lambda: list(DEFAULT_SATELLITES))
    download: dict[str, Any] = Field(default_factory=dict)
    layout: str = "satellite"
    multi_payload: Literal["overwrite", "indexed"] = "overwrite"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Precedence: constructor, environment, `.env`, then `config.yml`."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            EnvYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    def require_token(self) -> str:
        if not self.api_token:
            raise ConfigurationError(f"Missing API token, provide the {TOKEN_ENV_VAR} environment variable")
        return self.api_token

    def select_satellites(self, selectors: list[str] | None = None) -> list[Satellite]:
        """Filter the configured satellites by name or NORAD id, all of them when empty."""
        if not selectors:
            return list(self.satellites)
        selected = [sat for sat in self.satellites if any(sat.matches(s) for s in selectors)]
        unknown = [s for s in selectors if not any(sat.matches(s) for sat in self.satellites)]
        if unknown:
            known = [sat.name for sat in self.satellites]
            raise ConfigurationError(f"Unknown satellite(s) {unknown}, configured: {known}")
        return selected


_instance: SatnogsCtlSettings | None = None


def get_settings(**kwargs: Any) -> SatnogsCtlSettings:
    """Settings for the current process, loaded on first use.

    Raises:
        ConfigurationError: if `config.yml` or `.env` cannot be read, parsed or validated.
    """
    global _instance
    if _instance is None:
        try:
            _instance = SatnogsCtlSettings(**kwargs)
        except (ValueError, yaml.YAMLError, OSError) as e:
            # pydantic validation and envyaml placeholder errors are ValueErrors
            raise ConfigurationError(f"Unable to load settings: {e}") from e
    return _instance


def reset_settings() -> None:
    global _instance
    _instance = None
