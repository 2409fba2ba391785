"""Pixel-precise platformer physics: static tile layers, moving solids and actors."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from functools import reduce

from quadkit.geometry import Rect, Vec2


class Tile(Enum):
    """What occupies a cell of a collision layer."""

    EMPTY = "empty"
    SOLID = "solid"
    JUMP_THROUGH = "jump_through"
    COLLIDER = "collider"

    def combine(self, other: Tile) -> Tile:
        """Merge two tiles found by one query; anything blocking wins as SOLID."""
        passable = {Tile.EMPTY, Tile.JUMP_THROUGH}
        if self in passable and other in passable:
            if self is Tile.EMPTY and other is Tile.EMPTY:
                return Tile.EMPTY
            return Tile.JUMP_THROUGH
        return Tile.SOLID


@dataclass(frozen=True)
class Actor:
    """Handle of an actor registered in a World."""

    index: int


@dataclass(frozen=True)
class Solid:
    """Handle of a moving solid registered in a World."""

    index: int


@dataclass
class StaticTiledLayer:
    """A grid of tiles laid out row by row."""

    static_colliders: list[Tile]
    tile_width: float
    tile_height: float
    width: int
    tag: int


@dataclass
class _Collider:
    pos: Vec2
    width: int
    height: int
    collidable: bool = True
    squished: bool = False
    x_remainder: float = 0.0
    y_remainder: float = 0.0
    squishers: set[Solid] = field(default_factory=set)
    descent: bool = False
    seen_wood: bool = False

    def rect(self) -> Rect:
        return Rect(self.pos.x, self.pos.y, float(self.width), float(self.height))


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class World:
    """Collision world holding tile layers, solids and actors."""

    def __init__(self) -> None:
        self.static_tiled_layers: list[StaticTiledLayer] = []
        self._solids: list[_Collider] = []
        self._actors: list[_Collider] = []

    def add_static_tiled_layer(self, static_colliders, tile_width, tile_height, width, tag) -> None:
        self.static_tiled_layers.append(
            StaticTiledLayer(list(static_colliders), tile_width, tile_height, width, tag)
        )

    def add_actor(self, pos: Vec2, width: int, height: int) -> Actor:
        actor = Actor(len(self._actors))
        inside_wood = self.collide_solids(pos, width, height) is Tile.JUMP_THROUGH
        self._actors.append(
            _Collider(pos=pos, width=width, height=height, descent=inside_wood, seen_wood=inside_wood)
        )
        return actor

    def add_solid(self, pos: Vec2, width: int, height: int) -> Solid:
        solid = Solid(len(self._solids))
        self._solids.append(_Collider(pos=pos, width=width, height=height))
        return solid

    def set_actor_position(self, actor: Actor, pos: Vec2) -> None:
        collider = self._actors[actor.index]
        collider.x_remainder = 0.0
        collider.y_remainder = 0.0
        collider.pos = pos

    def descent(self, actor: Actor) -> None:
        """Let the actor fall through jump-through tiles."""
        self._actors[actor.index].descent = True

    def move_v(self, actor: Actor, dy: float) -> bool:
        """Move vertically pixel by pixel; return False if blocked."""
        collider = self._actors[actor.index]
        collider.y_remainder += dy
        remaining = _round_half_away(collider.y_remainder)
        if remaining != 0:
            collider.y_remainder -= remaining
            sign = _sign(remaining)
            while remaining != 0:
                tile = self.collide_solids(
                    collider.pos + Vec2(0.0, float(sign)), collider.width, collider.height
                )
                if tile is Tile.JUMP_THROUGH and collider.descent:
                    collider.seen_wood = True
                if tile is Tile.JUMP_THROUGH and sign < 0:
                    collider.seen_wood = True
                    collider.descent = True
                if tile is Tile.EMPTY or (tile is Tile.JUMP_THROUGH and collider.descent):
                    collider.pos = Vec2(collider.pos.x, collider.pos.y + sign)
                    remaining -= sign
                else:
                    return False

        if self.collide_solids(collider.pos, collider.width, collider.height) is not Tile.JUMP_THROUGH:
            collider.seen_wood = False
            collider.descent = False
        return True

    def move_h(self, actor: Actor, dx: float) -> bool:
        """Move horizontally pixel by pixel; return False if blocked."""
        collider = self._actors[actor.index]
        collider.x_remainder += dx
        remaining = _round_half_away(collider.x_remainder)
        if remaining != 0:
            collider.x_remainder -= remaining
            sign = _sign(remaining)
            while remaining != 0:
                tile = self.collide_solids(
                    collider.pos + Vec2(float(sign), 0.0), collider.width, collider.height
                )
                if tile is Tile.JUMP_THROUGH:
                    collider.descent = True
                    collider.seen_wood = True
                if tile in (Tile.EMPTY, Tile.JUMP_THROUGH):
                    collider.pos = Vec2(collider.pos.x + sign, collider.pos.y)
                    remaining -= sign
                else:
                    return False
        return True

    def solid_move(self, solid: Solid, dx: float, dy: float) -> None:
        """Move a solid, carrying riders and pushing (possibly squishing) actors."""
        collider = self._solids[solid.index]
        collider.x_remainder += dx
        collider.y_remainder += dy
        move_x = _round_half_away(collider.x_remainder)
        move_y = _round_half_away(collider.y_remainder)

        riding_rect = Rect(collider.pos.x, collider.pos.y - 1.0, float(collider.width), 1.0)
        pushing_rect = Rect(
            collider.pos.x + move_x,
            collider.pos.y,
            collider.width - 1.0,
            float(collider.height),
        )

        riding: list[Actor] = []
        pushing: list[Actor] = []
        for index, actor_collider in enumerate(self._actors):
            rider_rect = Rect(
                actor_collider.pos.x,
                actor_collider.pos.y + actor_collider.height - 1.0,
                float(actor_collider.width),
                1.0,
            )
            pushed = pushing_rect.overlaps(actor_collider.rect())
            if riding_rect.overlaps(rider_rect):
                riding.append(Actor(index))
            elif pushed and not actor_collider.squished:
                pushing.append(Actor(index))

            if not pushed:
                actor_collider.squishers.discard(solid)
                if not actor_collider.squishers:
                    actor_collider.squished = False

        collider.collidable = False
        for actor in riding:
            self.move_h(actor, float(move_x))
        for actor in pushing:
            if not self.move_h(actor, float(move_x)):
                squished = self._actors[actor.index]
                squished.squished = True
                squished.squishers.add(solid)
        collider.collidable = True

        if move_x != 0:
            collider.x_remainder -= move_x
            collider.pos = Vec2(collider.pos.x + move_x, collider.pos.y)
        if move_y != 0:
            collider.y_remainder -= move_y
            collider.pos = Vec2(collider.pos.x, collider.pos.y + move_y)

    def solid_at(self, pos: Vec2) -> bool:
        return self.tag_at(pos, 1)

    def tag_at(self, pos: Vec2, tag: int) -> bool:
        """True if the first non-empty layer tile at pos has this tag, or a solid covers pos."""
        for layer in self.static_tiled_layers:
            index = int(pos.y / layer.tile_width) * layer.width + int(pos.x / layer.tile_height)
            if 0 <= index < len(layer.static_colliders) and layer.static_colliders[index] is not Tile.EMPTY:
                return layer.tag == tag
        return any(s.collidable and s.rect().contains(pos) for s in self._solids)

    def collide_solids(self, pos: Vec2, width: int, height: int) -> Tile:
        """Tile met by a box: a layer tile of tag 1, else COLLIDER for a solid, else EMPTY."""
        tile = self.collide_tag(1, pos, width, height)
        if tile is not Tile.EMPTY:
            return tile
        box = Rect(pos.x, pos.y, float(width), float(height))
        if any(s.collidable and s.rect().overlaps(box) for s in self._solids):
            return Tile.COLLIDER
        return Tile.EMPTY

    @staticmethod
    def _layer_tile(layer: StaticTiledLayer, tag: int, x: float, y: float) -> Tile:
        index = int(y / layer.tile_width) * layer.width + int(x / layer.tile_height)
        if 0 <= index < len(layer.static_colliders) and layer.tag == tag:
            return layer.static_colliders[index]
        return Tile.EMPTY

    def collide_tag(self, tag: int, pos: Vec2, width: int, height: int) -> Tile:
        """Combined tile under the corners and edges of a box in layers with this tag."""
        right = pos.x + width - 1.0
        bottom = pos.y + height - 1.0
        for layer in self.static_tiled_layers:
            def check(*points: tuple[float, float]) -> Tile:
                tiles = (self._layer_tile(layer, tag, x, y) for x, y in points)
                return reduce(Tile.combine, tiles)

            tile = check((pos.x, pos.y), (right, pos.y), (right, bottom), (pos.x, bottom))
            if tile is not Tile.EMPTY:
                return tile

            if width > int(layer.tile_width):
                x = pos.x + layer.tile_width
                while x < right:
                    tile = check((x, pos.y), (x, bottom))
                    if tile is not Tile.EMPTY:
                        return tile
                    x += layer.tile_width

            if height > int(layer.tile_height):
                y = pos.y + layer.tile_height
                while y < bottom:
                    tile = check((pos.x, y), (right, y))
                    if tile is not Tile.EMPTY:
                        return tile
                    y += layer.tile_height
        return Tile.EMPTY

    def squished(self, actor: Actor) -> bool:
        return self._actors[actor.index].squished

    def actor_pos(self, actor: Actor) -> Vec2:
        return self._actors[actor.index].pos

    def solid_pos(self, solid: Solid) -> Vec2:
        return self._solids[solid.index].pos

    def collide_check(self, actor: Actor, pos: Vec2) -> bool:
        """True if the actor placed at pos would be blocked."""
        collider = self._actors[actor.index]
        tile = self.collide_solids(pos, collider.width, collider.height)
        blocking = {Tile.SOLID, Tile.COLLIDER}
        if not collider.descent:
            blocking.add(Tile.JUMP_THROUGH)
        return tile in blocking