"""Binding value types.

A binding re-associates a piece of application state with something the
spatial recognition system can find again:

- PointBinding: an offset from a single persistent anchor
- SceneBinding: the same placement expressed against several anchors of a
  recognized scene, so it survives when some anchors are not found

Both are immutable. The library layer treats them as opaque values and only
relies on them being msgspec-serializable and comparable.
"""

from enum import Enum, unique

import msgspec

Vector3 = tuple[float, float, float]
Quaternion = tuple[float, float, float, float]

IDENTITY_ROTATION: Quaternion = (0.0, 0.0, 0.0, 1.0)


class PointBinding(msgspec.Struct, frozen=True, kw_only=True):
    """Placement relative to one persistent anchor."""

    anchor_id: str
    position: Vector3 = (0.0, 0.0, 0.0)
    rotation: Quaternion = IDENTITY_ROTATION


class SceneBinding(msgspec.Struct, frozen=True, kw_only=True):
    """Placement relative to every anchor of a recognized scene."""

    points: tuple[PointBinding, ...] = ()

    @property
    def anchor_ids(self) -> tuple[str, ...]:
        """Anchor identifiers referenced by this binding, in order."""
        return tuple(point.anchor_id for point in self.points)


@unique
class BindingKind(Enum):
    """The two binding collections held by every library."""

    POINT = "point"
    SCENE = "scene"

    @property
    def value_type(self) -> type:
        """Value type stored under this kind."""
        return PointBinding if self is BindingKind.POINT else SceneBinding
