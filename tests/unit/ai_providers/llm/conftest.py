"""Shared fakes for provider client tests."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest


class FakeClient:
    """Client double exposing ``chat.completions.create``."""

    def __init__(self, **kwargs: Any) -> None:
        self.kwargs = kwargs
        self.chat = SimpleNamespace(
            completions=SimpleNamespace(create=self._create),
        )

    def _create(self, **kwargs: Any) -> dict[str, Any]:
        return kwargs


class ShapelessClient:
    """Client double missing the chat completions capability."""

    def __init__(self, **kwargs: Any) -> None:
        self.kwargs = kwargs
        self.chat = SimpleNamespace()


@pytest.fixture
def fake_client_class() -> type[FakeClient]:
    """Return a client class that passes the capability check."""
    return FakeClient


@pytest.fixture
def shapeless_client_class() -> type[ShapelessClient]:
    """Return a client class that fails the capability check."""
    return ShapelessClient
