"""Core binding value types."""

from .models import (
    IDENTITY_ROTATION,
    BindingKind,
    PointBinding,
    Quaternion,
    SceneBinding,
    Vector3,
)

__all__ = [
    "BindingKind",
    "IDENTITY_ROTATION",
    "PointBinding",
    "Quaternion",
    "SceneBinding",
    "Vector3",
]
