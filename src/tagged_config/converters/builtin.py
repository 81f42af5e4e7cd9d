from __future__ import annotations

from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Dict, List

from .registry import ConverterRegistry

_TRUE = frozenset({"true", "yes", "on", "1"})
_FALSE = frozenset({"false", "no", "off", "0"})


def to_str(value: str) -> str:
    return value


def to_int(value: str) -> int:
    return int(value.strip())


def to_float(value: str) -> float:
    return float(value.strip())


def to_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def to_decimal(value: str) -> Decimal:
    try:
        return Decimal(value.strip())
    except InvalidOperation as exc:
        raise ValueError(f"not a decimal: {value!r}") from exc


def to_path(value: str) -> Path:
    if not value.strip():
        raise ValueError("empty path")
    return Path(value.strip())


def _unwrap(value: str, opening: str, closing: str) -> str:
    text = value.strip()
    if text.startswith(opening):
        if not text.endswith(closing):
            raise ValueError(f"missing closing {closing!r}")
        text = text[1:-1]
    return text.strip()


def to_list(value: str) -> List[str]:
    """``[a, b]`` or ``a, b``; items are stripped."""
    text = _unwrap(value, "[", "]")
    if not text:
        return []
    return [item.strip() for item in text.split(",")]


def to_dict(value: str) -> Dict[str, str]:
    """``{k1: v1, k2: v2}``; keys and values are stripped."""
    text = _unwrap(value, "{", "}")
    result: Dict[str, str] = {}
    if not text:
        return result
    for pair in text.split(","):
        k, sep, v = pair.partition(":")
        if not sep or not k.strip():
            raise ValueError(f"malformed map entry: {pair.strip()!r}")
        result[k.strip()] = v.strip()
    return result


def register_builtins(registry: ConverterRegistry, override: bool = False) -> None:
    registry.register(str, to_str, override=override)
    registry.register(int, to_int, override=override)
    registry.register(float, to_float, override=override)
    registry.register(bool, to_bool, override=override)
    registry.register(Decimal, to_decimal, override=override)
    registry.register(Path, to_path, override=override)
    registry.register(list, to_list, override=override)
    registry.register(dict, to_dict, override=override)
