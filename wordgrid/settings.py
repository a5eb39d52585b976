import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Settings:
    BASE_DIR: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    DICTIONARY_PATH: Path = field(init=False)

    MIN_WORD_LENGTH: int = 3
    MAX_RESULTS: int = 0
    RANK_DISPLAY_MODE: str = "paths"

    DEBUG: bool = False
    PORT: int = 10001

    def __post_init__(self):
        self.DICTIONARY_PATH = self.BASE_DIR / "dictionary.txt"

        # Override from environment; editable fields get the same checks as runtime updates
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                current = getattr(self, fld)
                if fld in EDITABLE_FIELDS:
                    try:
                        setattr(self, fld, _coerce(fld, env_val, EDITABLE_FIELDS[fld]))
                    except ValueError as e:
                        raise ValueError(f"Invalid environment value {fld}={env_val!r}: {e}") from None
                elif isinstance(current, bool):
                    setattr(self, fld, env_val.lower() in ("1", "true", "yes"))
                elif isinstance(current, int):
                    setattr(self, fld, int(env_val))
                elif isinstance(current, Path):
                    setattr(self, fld, Path(env_val))
                else:
                    setattr(self, fld, env_val)


# Fields the /api/settings endpoint may change at runtime
EDITABLE_FIELDS: dict[str, type] = {
    "MIN_WORD_LENGTH": int,
    "MAX_RESULTS": int,
    "RANK_DISPLAY_MODE": str,
    "DEBUG": bool,
}

_CHOICES = {
    "RANK_DISPLAY_MODE": ("paths", "count"),
}

_MINIMUMS = {
    "MIN_WORD_LENGTH": 1,
    "MAX_RESULTS": 0,
}


def _coerce(name: str, value, typ: type):
    if typ is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in ("1", "true", "yes", "0", "false", "no"):
            return value.lower() in ("1", "true", "yes")
        raise ValueError(f"expected a boolean, got {value!r}")
    if typ is int:
        if isinstance(value, bool):
            raise ValueError(f"expected an integer, got {value!r}")
        if isinstance(value, int):
            coerced = value
        elif isinstance(value, str) and value.strip().lstrip("+-").isdigit():
            coerced = int(value)
        else:
            raise ValueError(f"expected an integer, got {value!r}")
        if coerced < _MINIMUMS.get(name, coerced):
            raise ValueError(f"must be >= {_MINIMUMS[name]}")
        return coerced
    coerced = str(value)
    if name in _CHOICES and coerced not in _CHOICES[name]:
        raise ValueError(f"must be one of {_CHOICES[name]}")
    return coerced


def update_settings(cfg: Settings, /, **values) -> dict[str, str]:
    """Apply the valid values and return an error message per rejected field."""
    errors: dict[str, str] = {}
    for name, value in values.items():
        if name not in EDITABLE_FIELDS:
            if hasattr(cfg, name):
                errors[name] = "not editable"
            else:
                errors[name] = "unknown setting"
            continue
        try:
            setattr(cfg, name, _coerce(name, value, EDITABLE_FIELDS[name]))
        except (TypeError, ValueError) as e:
            errors[name] = str(e)
    return errors


def get_editable_settings(cfg: Settings) -> dict:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


settings = Settings()
