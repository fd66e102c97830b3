"""Named layout constants shared by the configuration store and range helpers."""

from __future__ import annotations

from typing import Final

# Added to the user supplied left/bottom margin to leave room for axis label overflow.
LEFT_GAP: Final[float] = 4.0
BOTTOM_GAP: Final[float] = 2.0

# Space between the end of a grouped bar and its icon.
SYMBOL_GAP: Final[float] = 5.0

# Border width, in pixels, accumulated by each stacked layer.
STACKED_LAYER_DEPTH: Final[int] = 1

# Used when a time domain has to be synthesized from no data.
EPOCH_TIMESTAMP: Final[float] = 0.0
