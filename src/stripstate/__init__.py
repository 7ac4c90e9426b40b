"""stripstate - strip marker bindings for multi-pass text pipelines."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("stripstate")
except PackageNotFoundError:
    __version__ = "0+local"
from stripstate._constants import MARKER_PREFIX, MARKER_SUFFIX
from stripstate.codec import MarkerCodec, MarkerMinter
from stripstate.config import StripConfig
from stripstate.exceptions import InvalidMarkerError, StripConfigError, StripStateError
from stripstate.messages import EnglishMessages, MessageFormatter
from stripstate.models import BoundValue, DeferredValue, LiteralValue, MarkerMatch, StripCategory
from stripstate.store import StripState

__all__ = [
    "__version__",
    "BoundValue",
    "DeferredValue",
    "EnglishMessages",
    "InvalidMarkerError",
    "LiteralValue",
    "MARKER_PREFIX",
    "MARKER_SUFFIX",
    "MarkerCodec",
    "MarkerMatch",
    "MarkerMinter",
    "MessageFormatter",
    "StripCategory",
    "StripConfig",
    "StripConfigError",
    "StripState",
    "StripStateError",
]
