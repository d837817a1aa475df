"""Test utilities for the env module."""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator, Mapping, MutableMapping
from unittest import mock


@contextmanager
def override_environ(
    values: Mapping[str, str] | None = None,
    *,
    clear: bool = False,
) -> Iterator[MutableMapping[str, str]]:
    """Temporarily patch ``os.environ``.

    Usage::

        with override_environ({"PORT": "8080"}, clear=True):
            assert Env({"PORT": FieldRule.number()}).get("PORT") == 8080

    The original environment is restored on exit, including keys added or
    removed inside the block.
    """
    with mock.patch.dict(os.environ, dict(values or {}), clear=clear):
        yield os.environ
