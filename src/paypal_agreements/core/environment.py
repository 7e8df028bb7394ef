"""
Settings sources for the PayPal client: process environment, ``.env`` files
and explicit overrides, resolved into one :class:`ClientEnvironment`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Mapping, MutableMapping, Optional, Tuple

__all__ = [
    "ClientEnvironment",
    "build_environment",
    "load_env_file",
    "read_env_file",
]

_QUOTES = ("'", '"')


def _clean_value(raw: str) -> str:
    value = raw.strip()
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    # unquoted values may carry a trailing " # comment"
    comment_at = value.find(" #")
    if comment_at != -1:
        value = value[:comment_at].rstrip()
    return value


def _assignments(text: str) -> Iterator[Tuple[str, str]]:
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key or " " in key:
            continue
        yield key, _clean_value(value)


def read_env_file(path: str | Path) -> Dict[str, str]:
    """
    Return the assignments found in a ``.env`` file, or ``{}`` if it is absent.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    return dict(_assignments(text))


def load_env_file(
    path: str = ".env",
    *,
    environ: Optional[MutableMapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Fill ``environ`` (``os.environ`` by default) from ``path`` without
    replacing keys that are already set, and return a snapshot of it.
    """
    target: MutableMapping[str, str] = os.environ if environ is None else environ
    for key, value in read_env_file(path).items():
        if key not in target:
            target[key] = value
    return dict(target)


@dataclass(frozen=True)
class ClientEnvironment:
    """Resolved settings the PayPal configuration is read from."""

    variables: Mapping[str, str]

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.variables.get(key, default)

    @classmethod
    def layered(
        cls,
        *sources: Optional[Mapping[str, str]],
        fill_only: Optional[Mapping[str, str]] = None,
    ) -> "ClientEnvironment":
        """
        Merge ``sources`` left to right, later ones winning.

        ``fill_only`` is applied after the first source and only supplies
        keys that source did not define.
        """
        merged: Dict[str, str] = {}
        for index, source in enumerate(sources):
            if source:
                merged.update(source)
            if index == 0 and fill_only:
                for key, value in fill_only.items():
                    merged.setdefault(key, value)
        return cls(variables=merged)


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> ClientEnvironment:
    """
    Resolve settings as ``base`` (default :data:`os.environ`), then values
    from ``env_file`` for keys ``base`` lacks, then ``overrides``.

    Pass ``env_file=None`` to skip reading a file.
    """
    file_values = read_env_file(env_file) if env_file is not None else None
    return ClientEnvironment.layered(
        os.environ if base is None else base,
        overrides,
        fill_only=file_values,
    )
