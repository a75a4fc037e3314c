# -*- coding: utf-8 -*-
"""
QR Studio Configuration

Generation defaults live in a single QRConfig. They can be overridden from
environment variables (QRSTUDIO_*) or from request parameters; unparsable
or out-of-range values fall back to the default instead of failing.
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from .tables import normalize_ec_level

logger = logging.getLogger(__name__)

ENV_PREFIX = 'QRSTUDIO_'

QUIET_ZONE_RANGE = (0, 20)
PIXELS_PER_MODULE_RANGE = (1, 50)


@dataclass(frozen=True)
class QRConfig:
    ec_level: str = 'M'
    quiet_zone: int = 4
    pixels_per_module: int = 10
    dark_color: str = '#000000'
    light_color: str = '#ffffff'
    debounce_seconds: float = 0.3
    boost_error: bool = False
    allow_downgrade: bool = True
    log_level: str = 'INFO'

    def with_overrides(self, **changes: Any) -> 'QRConfig':
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None,
                 defaults: Optional['QRConfig'] = None) -> 'QRConfig':
        """Read QRSTUDIO_EC_LEVEL, QRSTUDIO_QUIET_ZONE, ... from the environment."""
        environ = os.environ if environ is None else environ
        values = {key[len(ENV_PREFIX):].lower(): value
                  for key, value in environ.items() if key.startswith(ENV_PREFIX)}
        return cls.from_values(values, defaults)

    @classmethod
    def from_values(cls, values: Mapping[str, Any],
                    defaults: Optional['QRConfig'] = None) -> 'QRConfig':
        """
        Parse loosely typed values (request form, environment) into a config.

        Missing keys keep the defaults. Bad values are logged and replaced by
        the default, the same way the form handler always treated them.
        """
        base = defaults or cls()
        return cls(
            ec_level=_parse_ec_level(values.get('ec_level', values.get('ecc')), base.ec_level),
            quiet_zone=_parse_int(values.get('quiet_zone', values.get('border')), base.quiet_zone,
                                  *QUIET_ZONE_RANGE, name='quiet_zone'),
            pixels_per_module=_parse_int(values.get('pixels_per_module', values.get('scale')),
                                         base.pixels_per_module, *PIXELS_PER_MODULE_RANGE,
                                         name='pixels_per_module'),
            dark_color=_parse_str(values.get('dark_color', values.get('dark')), base.dark_color),
            light_color=_parse_str(values.get('light_color', values.get('light')), base.light_color),
            debounce_seconds=_parse_float(values.get('debounce_seconds'), base.debounce_seconds),
            boost_error=_parse_bool(values.get('boost_error'), base.boost_error),
            allow_downgrade=_parse_bool(values.get('allow_downgrade'), base.allow_downgrade),
            log_level=_parse_str(values.get('log_level'), base.log_level).upper(),
        )


def _parse_str(raw: Any, default: str) -> str:
    if raw is None:
        return default
    value = str(raw).strip()
    return value or default


def _parse_ec_level(raw: Any, default: str) -> str:
    if raw is None or not str(raw).strip():
        return default
    try:
        return normalize_ec_level(str(raw)).name
    except ValueError:
        logger.warning("Ignoring invalid error correction level %r", raw)
        return default


def _parse_int(raw: Any, default: int, low: int, high: int, name: str) -> int:
    if raw is None or raw == '':
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid %s %r", name, raw)
        return default
    if value < low or value > high:
        logger.warning("Ignoring out-of-range %s %r", name, raw)
        return default
    return value


def _parse_float(raw: Any, default: float) -> float:
    if raw is None or raw == '':
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid debounce delay %r", raw)
        return default
    return value if value >= 0 else default


def _parse_bool(raw: Any, default: bool) -> bool:
    if raw is None or raw == '':
        return default
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in ('1', 'true', 'yes', 'on')
