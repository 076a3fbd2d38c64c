# edid_decoder/config.py
from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .protocol import BLOCK_SIZE

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when decoder configuration is invalid."""

    pass


class ManufacturerCharset(Enum):
    """How 5-bit manufacturer ID codes become characters."""

    RAW = "raw"  # code n -> chr(n), byte-exact
    PNP = "pnp"  # code n -> chr(n + 64), 1..26 -> 'A'..'Z'

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DecoderConfig:
    chunk_size: int = BLOCK_SIZE
    manufacturer_charset: ManufacturerCharset = ManufacturerCharset.RAW

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ConfigError(f"chunk_size must be > 0, got {self.chunk_size}")
        if not isinstance(self.manufacturer_charset, ManufacturerCharset):
            raise ConfigError(
                f"manufacturer_charset must be a ManufacturerCharset, got {self.manufacturer_charset!r}"
            )


def _parse_charset(value: str | None) -> ManufacturerCharset:
    value = (value or "raw").lower()
    try:
        return ManufacturerCharset(value)
    except ValueError:
        raise ConfigError(f"Invalid manufacturer_charset '{value}' in config file") from None


def load_from_toml(config_path: str | Path) -> DecoderConfig:
    """
    Load a DecoderConfig from a TOML file.

    Expected TOML structure:

    [decoder]
    chunk_size = 128
    manufacturer_charset = "raw"  # raw|pnp
    """
    p = Path(config_path)
    if not p.exists():
        raise FileNotFoundError(f"Configuration file not found: {p}")

    with p.open("rb") as f:
        data = tomllib.load(f)

    decoder = data.get("decoder") or {}
    cfg = DecoderConfig(
        chunk_size=int(decoder.get("chunk_size", BLOCK_SIZE)),
        manufacturer_charset=_parse_charset(decoder.get("manufacturer_charset")),
    )

    logger.info(
        "Loaded DecoderConfig: chunk_size=%d, manufacturer_charset=%s",
        cfg.chunk_size,
        cfg.manufacturer_charset,
    )
    return cfg


def default_config() -> DecoderConfig:
    """Byte-exact defaults: 128-byte refills, raw manufacturer codes."""
    return DecoderConfig()
