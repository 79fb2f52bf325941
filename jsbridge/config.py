"""
Bridge configuration read from an INI file.

    [Bridge]
    log_level = DEBUG
    identity_cache = true
    truncate_strings = false
    exposed_members.csv = dtype,shape,ndim,size
"""
from __future__ import annotations
import configparser
import logging
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

logger = logging.getLogger('jsbridge.config')

SECTION = 'Bridge'
DEFAULT_EXPOSED_MEMBERS = ('dtype', 'shape', 'ndim', 'size', 'itemsize', 'nbytes', 'tolist', 'copy')


@dataclass(frozen=True)
class BridgeConfig:
    log_level: str = 'WARNING'
    identity_cache: bool = False
    truncate_strings: bool = False
    exposed_members: Tuple[str, ...] = field(default=DEFAULT_EXPOSED_MEMBERS)


def _from_parser(config: configparser.ConfigParser) -> BridgeConfig:
    if not config.has_section(SECTION):
        return BridgeConfig()
    members_csv = config.get(SECTION, 'exposed_members.csv', fallback=','.join(DEFAULT_EXPOSED_MEMBERS))
    members = tuple(m.strip() for m in members_csv.split(',') if m.strip())
    return BridgeConfig(
        log_level=config.get(SECTION, 'log_level', fallback='WARNING').strip().upper(),
        identity_cache=config.getboolean(SECTION, 'identity_cache', fallback=False),
        truncate_strings=config.getboolean(SECTION, 'truncate_strings', fallback=False),
        exposed_members=members,
    )


def load_config(path: Optional[str] = None, text: Optional[str] = None) -> BridgeConfig:
    """Load configuration from `text` or from the INI file at `path`.

    A missing file yields the defaults; an unparsable one logs a warning and
    yields the defaults as well.
    """
    config = configparser.ConfigParser()
    try:
        if text is not None:
            config.read_string(text)
        elif path is not None and os.path.exists(path):
            config.read(path, encoding='utf-8')
        return _from_parser(config)
    except (configparser.Error, ValueError) as e:
        logger.warning("Could not parse bridge configuration (%s); using defaults", e)
        return BridgeConfig()


def configure_logging(cfg: BridgeConfig) -> None:
    level = logging.getLevelName(cfg.log_level)
    if not isinstance(level, int):
        logger.warning("Unknown log_level %r; leaving jsbridge logger unchanged", cfg.log_level)
        return
    logging.getLogger('jsbridge').setLevel(level)


DEFAULT_CONFIG = BridgeConfig()
