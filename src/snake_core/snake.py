"""Snake representation and direction helpers."""

from __future__ import annotations

import enum

from snake_core.grid import Position


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    ``y`` grows downward, so UP decrements it.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def vector(self) -> Position:
        return self.value

    def reverse(self) -> Direction:
        """Return the opposite direction."""
        return _OPPOSITES[self]


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Snake:
    """A snake held as a head coordinate plus a body list.

    ``body[0]`` is the segment just behind the head; ``body[-1]`` is the
    tail. The head is never part of ``body`` while the snake is alive.
    """

    def __init__(
        self,
        head: Position,
        direction: Direction = Direction.RIGHT,
        length: int = 10,
    ) -> None:
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dy = direction.vector
        hx, hy = head
        self.head: Position = (hx, hy)
        self.body: list[Position] = [
            (hx - dx * i, hy - dy * i) for i in range(1, length)
        ]
        self.direction = direction

    def __len__(self) -> int:
        return len(self.body) + 1

    @property
    def tail(self) -> Position:
        """Return the tail-most segment (the head for a length-1 snake)."""
        return self.body[-1] if self.body else self.head

    def set_direction(self, new_direction: Direction) -> bool:
        """Change direction, ignoring 180° reversals.

        Returns ``True`` if the change was accepted.
        """
        if new_direction == self.direction.reverse():
            return False
        self.direction = new_direction
        return True

    def next_head(self) -> Position:
        """Compute the unwrapped next head position without moving."""
        dx, dy = self.direction.vector
        x, y = self.head
        return x + dx, y + dy

    def collides_with_body(self, pos: Position) -> bool:
        """Check whether *pos* is covered by any body segment."""
        return pos in self.body

    def advance(self, new_head: Position) -> Position:
        """Move the head to *new_head*, dragging the body behind it.

        Every segment takes the place of the one ahead of it and the old
        head becomes ``body[0]``. Returns the former tail position.
        """
        former_tail = self.tail
        if self.body:
            self.body = [self.head] + self.body[:-1]
        self.head = new_head
        return former_tail

    def grow(self, at: Position) -> None:
        """Append one segment at *at*, behind the current tail."""
        self.body.append(at)

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "head": list(self.head),
            "body": [list(seg) for seg in self.body],
            "direction": self.direction.name.lower(),
        }
