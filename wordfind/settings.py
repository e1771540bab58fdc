import os
from dataclasses import dataclass, field
from pathlib import Path

# Relative English letter frequencies for a-z.
# http://pi.math.cornell.edu/~mec/2003-2004/cryptography/subs/frequencies.html
ENGLISH_LETTER_FREQUENCIES = [
    0.0812, 0.0149, 0.0271, 0.0432, 0.1202, 0.023, 0.0203, 0.0592, 0.0731,
    0.001, 0.0069, 0.0398, 0.0261, 0.0695, 0.0768, 0.0182, 0.0011, 0.0602,
    0.0628, 0.091, 0.0288, 0.0111, 0.0209, 0.0017, 0.0211, 0.0007,
]


@dataclass
class Settings:
    BASE_DIR: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    DICTIONARY_PATH: Path = field(init=False)

    ALPHABET: str = "abcdefghijklmnopqrstuvwxyz"
    LETTER_FREQUENCIES: list = field(default_factory=lambda: list(ENGLISH_LETTER_FREQUENCIES))

    BOARD_WIDTH: int = 4
    BOARD_HEIGHT: int = 4
    ROUND_DURATION_MS: int = 120_000
    MIN_WORD_LENGTH: int = 3

    TICK_INTERVAL: float = 0.1
    FINDER_WORKERS: int = 1
    FIND_RETRIES: int = 1

    NTFY_TOPIC: str = ""
    NTFY_URL: str = "https://ntfy.sh"
    DEBUG: bool = False

    def __post_init__(self):
        self.DICTIONARY_PATH = self.BASE_DIR / "dictionary.txt"

        # Override from environment
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                current = getattr(self, fld)
                if isinstance(current, bool):
                    setattr(self, fld, env_val.lower() in ("1", "true", "yes"))
                elif isinstance(current, int):
                    setattr(self, fld, int(env_val))
                elif isinstance(current, float):
                    setattr(self, fld, float(env_val))
                elif isinstance(current, Path):
                    setattr(self, fld, Path(env_val))
                elif isinstance(current, list):
                    setattr(self, fld, [float(v) for v in env_val.split(",") if v.strip()])
                else:
                    setattr(self, fld, env_val)


# Fields that may be changed at runtime through /api/settings.
# They take effect from the next round.
EDITABLE_FIELDS: dict[str, type] = {
    "BOARD_WIDTH": int,
    "BOARD_HEIGHT": int,
    "ROUND_DURATION_MS": int,
    "TICK_INTERVAL": float,
    "NTFY_TOPIC": str,
    "DEBUG": bool,
}


def get_editable_settings(cfg: Settings) -> dict:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


def _coerce(value, typ: type):
    if typ is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        raise ValueError(f"expected bool, got {value!r}")
    if typ is int and isinstance(value, bool):
        raise ValueError(f"expected int, got {value!r}")
    return typ(value)


def update_settings(cfg: Settings, **values) -> dict[str, str]:
    """Apply editable values to ``cfg``; returns per-field error messages.

    Valid fields are applied even when others are rejected.
    """
    errors: dict[str, str] = {}
    for name, value in values.items():
        typ = EDITABLE_FIELDS.get(name)
        if typ is None:
            if name in cfg.__dataclass_fields__:
                errors[name] = "not editable"
            else:
                errors[name] = "unknown setting"
            continue
        try:
            coerced = _coerce(value, typ)
        except (TypeError, ValueError) as e:
            errors[name] = str(e)
            continue
        if typ in (int, float) and coerced <= 0:
            errors[name] = "must be positive"
            continue
        setattr(cfg, name, coerced)
    return errors


def game_config(cfg: Settings, dictionary, **hooks):
    """Build a validated GameConfig from settings; raises ConfigError."""
    from wordfind.game import GameConfig

    return GameConfig(
        alphabet=cfg.ALPHABET,
        letter_frequencies=cfg.LETTER_FREQUENCIES,
        board_width=cfg.BOARD_WIDTH,
        board_height=cfg.BOARD_HEIGHT,
        round_duration=cfg.ROUND_DURATION_MS,
        dictionary=dictionary,
        find_retries=cfg.FIND_RETRIES,
        **hooks,
    )


settings = Settings()
