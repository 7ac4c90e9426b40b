from __future__ import annotations

import pytest

from stripstate.codec import MarkerCodec


@pytest.fixture
def codec() -> MarkerCodec:
    return MarkerCodec()


@pytest.fixture
def marker(codec: MarkerCodec):
    """Mint the marker token for an identifier."""
    return codec.make_marker
