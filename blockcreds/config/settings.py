"""
Settings Module
===============

Environment-driven configuration for the gate, minting and the HTTP
service.

Version: 0.1.0
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class BlockchainMode(str, Enum):
    """Blockchain operation mode. Only the in-memory mock has an executor."""

    MOCK = "mock"


class ArtifactSource(str, Enum):
    """Where the gate looks for proof artifacts."""

    HTTP = "http"
    DIRECTORY = "directory"
    NONE = "none"


class VerifierBackend(str, Enum):
    """Cryptographic verifier used by the gate."""

    SNARKJS = "snarkjs"
    NONE = "none"


class ZKSettings(BaseSettings):
    """Zero-knowledge artifact and verifier configuration."""

    model_config = SettingsConfigDict(env_prefix="ZK_")

    artifact_source: ArtifactSource = ArtifactSource.DIRECTORY
    artifact_url: str = "http://localhost:3000/zkp"
    artifact_dir: Path = Path("public/zkp")
    probe_timeout_seconds: float = 10.0
    probe_retries: int = Field(default=3, ge=1)

    verifier: VerifierBackend = VerifierBackend.SNARKJS
    snarkjs_command: str = "npx snarkjs"

    # Pauses of the simulated verification narrative, in seconds
    fallback_pauses: list[float] = Field(default_factory=lambda: [1.2, 1.2, 0.8])

    commitment_output: Path = Path("input.json")

    @field_validator("fallback_pauses")
    @classmethod
    def pauses_must_be_bounded(cls, v: list[float]) -> list[float]:
        """Ensure simulated pauses are non-negative and short."""
        if len(v) != 3:
            raise ValueError("fallback_pauses must contain exactly 3 values")
        if any(p < 0 or p > 10 for p in v):
            raise ValueError("fallback_pauses must be within [0, 10] seconds")
        return v


class MintSettings(BaseSettings):
    """Credential minting configuration."""

    model_config = SettingsConfigDict(env_prefix="MINT_")

    history_path: Path = Path("data/minted_credentials.json")
    default_issuer: str = "BlockCreds Labs"
    default_min_score: int = Field(default=650, ge=0)


class BlockchainSettings(BaseSettings):
    """Blockchain integration configuration."""

    model_config = SettingsConfigDict(env_prefix="BLOCKCHAIN_")

    mode: BlockchainMode = BlockchainMode.MOCK
    chain_id: int = Field(default=31337, gt=0)


class CORSSettings(BaseSettings):
    """CORS configuration."""

    model_config = SettingsConfigDict(env_prefix="CORS_")

    origins: str = "http://localhost:3000,http://localhost:5173"
    allow_credentials: bool = True

    @property
    def origins_list(self) -> list[str]:
        """Parse origins string into list."""
        return [o.strip() for o in self.origins.split(",") if o.strip()]


class Settings(BaseSettings):
    """
    BlockCreds settings.

    Top-level values come from unprefixed variables (``ENVIRONMENT``,
    ``LOG_LEVEL``); each nested group reads its own prefix.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True
    log_level: LogLevel = LogLevel.INFO

    # Service port
    credentials_port: int = Field(default=8010, alias="CREDENTIALS_PORT")

    zk: ZKSettings = Field(default_factory=ZKSettings)
    mint: MintSettings = Field(default_factory=MintSettings)
    blockchain: BlockchainSettings = Field(default_factory=BlockchainSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Ensure log level is uppercase."""
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """Settings are read from the environment once per process."""
    return Settings()
