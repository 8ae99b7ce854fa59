from __future__ import annotations

import math
from typing import Optional, Tuple

from cubie_sim.config import (
    CAMERA_DISTANCE,
    CAMERA_FOV,
    CAMERA_MAX_DISTANCE,
    CAMERA_MIN_DISTANCE,
    CAMERA_PITCH,
    CAMERA_YAW,
)

Vec3f = Tuple[float, float, float]
Vec2f = Tuple[float, float]


class OrbitCamera:
    """Cámara orbital (yaw/pitch/distancia) con proyección en perspectiva.

    La transformación coincide con la que aplica el widget OpenGL:
    `glTranslatef(0, 0, -distance)`, `glRotatef(pitch, 1, 0, 0)`,
    `glRotatef(yaw, 0, 1, 0)` y `gluPerspective(fov, aspect, ...)`.
    """

    def __init__(
        self,
        yaw: float = CAMERA_YAW,
        pitch: float = CAMERA_PITCH,
        distance: float = CAMERA_DISTANCE,
        fov: float = CAMERA_FOV,
        aspect: float = 1.0,
    ) -> None:
        self.yaw: float = yaw
        self.pitch: float = pitch
        self.distance: float = distance
        self.fov: float = fov
        self.aspect: float = aspect

    def orbit(self, dx: float, dy: float, sens: float = 0.4) -> None:
        """Gira la cámara según un delta de mouse en píxeles."""
        self.yaw += dx * sens
        self.pitch += dy * sens
        self.pitch = max(-89.0, min(89.0, self.pitch))

    def zoom(self, steps: float) -> None:
        self.distance -= steps * 0.3
        self.distance = max(CAMERA_MIN_DISTANCE, min(CAMERA_MAX_DISTANCE, self.distance))

    def to_view(self, p: Vec3f) -> Vec3f:
        """Lleva un punto del mundo a coordenadas de cámara."""
        x, y, z = p

        a = math.radians(self.yaw)
        c, s = math.cos(a), math.sin(a)
        x, z = x * c + z * s, -x * s + z * c

        b = math.radians(self.pitch)
        c, s = math.cos(b), math.sin(b)
        y, z = y * c - z * s, y * s + z * c

        return (x, y, z - self.distance)

    def project(self, p: Vec3f) -> Vec2f:
        """Proyecta un punto del mundo a coordenadas normalizadas de pantalla (NDC).

        Returns:
            (x, y) en [-1, 1] para puntos visibles; +y hacia arriba.
        """
        x, y, z = self.to_view(p)
        depth = max(-z, 1e-6)
        f = 1.0 / math.tan(math.radians(self.fov) / 2.0)
        return (f / self.aspect * x / depth, f * y / depth)

    def _to_world_dir(self, v: Vec3f) -> Vec3f:
        """Deshace las rotaciones de `to_view` (pitch y luego yaw)."""
        x, y, z = v

        b = math.radians(self.pitch)
        c, s = math.cos(b), math.sin(b)
        y, z = y * c + z * s, -y * s + z * c

        a = math.radians(self.yaw)
        c, s = math.cos(a), math.sin(a)
        x, z = x * c - z * s, x * s + z * c

        return (x, y, z)

    def ray(self, ndc: Vec2f) -> Tuple[Vec3f, Vec3f]:
        """Rayo del mundo que pasa por un punto de pantalla.

        Returns:
            (origen, dirección): origen en el ojo de la cámara, dirección sin normalizar.
        """
        f = 1.0 / math.tan(math.radians(self.fov) / 2.0)
        origin = self._to_world_dir((0.0, 0.0, self.distance))
        direction = self._to_world_dir((ndc[0] * self.aspect / f, ndc[1] / f, -1.0))
        return origin, direction

    def intersect_plane(self, ndc: Vec2f, point: Vec3f, normal: Vec3f) -> Optional[Vec3f]:
        """Intersección del rayo por `ndc` con el plano (`point`, `normal`).

        Returns:
            El punto del mundo, o None si el rayo es paralelo al plano o el
            plano queda detrás de la cámara.
        """
        o, d = self.ray(ndc)
        denom = d[0] * normal[0] + d[1] * normal[1] + d[2] * normal[2]
        if abs(denom) < 1e-9:
            return None
        t = (
            (point[0] - o[0]) * normal[0]
            + (point[1] - o[1]) * normal[1]
            + (point[2] - o[2]) * normal[2]
        ) / denom
        if t <= 0.0:
            return None
        return (o[0] + d[0] * t, o[1] + d[1] * t, o[2] + d[2] * t)
