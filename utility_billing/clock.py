"""Block height clock supplied by the execution environment."""

from dataclasses import dataclass


@dataclass
class BlockClock:
    """Monotonically increasing block height."""

    height: int = 0

    def advance(self, blocks: int = 1) -> int:
        """Move the clock forward and return the new height."""
        if blocks < 0:
            raise ValueError(f"Cannot advance clock by {blocks} blocks")
        self.height += blocks
        return self.height

    def set_height(self, height: int) -> int:
        """Jump to ``height``, which must not be below the current height."""
        if height < self.height:
            raise ValueError(f"Block height cannot move backwards ({self.height} -> {height})")
        self.height = height
        return self.height
