"""
FeyForge - character engine for a D&D 5e campaign manager.

Computes derived character stats (AC, skills, saves, passive perception,
carrying load, spellcasting) from a character snapshot, and tracks the
mutable parts of the sheet (HP, hit dice, spell slots, resources, XP).
"""

from .character import *  # noqa: F401,F403
from .character import __all__ as _character_all
from .config import DEFAULT_RULES, RulesConfig, load_rules_config
from .exceptions import CharacterStateError, ConfigError, FeyforgeError

try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version("feyforge")
except Exception:
    __version__ = "0.1.0"  # Fallback if metadata unavailable

__all__ = [
    "DEFAULT_RULES",
    "RulesConfig",
    "load_rules_config",
    "FeyforgeError",
    "ConfigError",
    "CharacterStateError",
] + list(_character_all)
