from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from PySide6.QtCore import QElapsedTimer, QPoint, QTimer, Qt, Signal
from PySide6.QtGui import QMouseEvent, QWheelEvent
from PySide6.QtOpenGLWidgets import QOpenGLWidget

from OpenGL.GL import (
    glBegin,
    glClear,
    glClearColor,
    glColor3f,
    glDisable,
    glEnable,
    glEnd,
    glFlush,
    glLoadIdentity,
    glMatrixMode,
    glMultMatrixf,
    glPopMatrix,
    glPushMatrix,
    glReadPixels,
    glRotatef,
    glTranslatef,
    glVertex3f,
    glViewport,
    GL_BLEND,
    GL_COLOR_BUFFER_BIT,
    GL_DEPTH_BUFFER_BIT,
    GL_DEPTH_TEST,
    GL_DITHER,
    GL_MODELVIEW,
    GL_PROJECTION,
    GL_QUADS,
    GL_RGB,
    GL_UNSIGNED_BYTE,
)
from OpenGL.GLU import gluPerspective

from cubie_sim.app.controller import CubeController
from cubie_sim.config import COLOR_RGB, CORE_RGB, FRAME_INTERVAL_MS
from cubie_sim.core.cubie_store import SLOT_NORMALS
from cubie_sim.core.move import Move
from cubie_sim.logic.moves import move_to_token
from cubie_sim.render.camera import OrbitCamera

logger = logging.getLogger(__name__)

Vec3f = Tuple[float, float, float]
StickerHit = Tuple[int, int]  # (índice de cubie, slot)

# Tangentes locales de cada slot (para armar el quad de la cara)
_SLOT_TANGENTS: Tuple[Tuple[Vec3f, Vec3f], ...] = (
    ((0.0, 1.0, 0.0), (0.0, 0.0, 1.0)),
    ((0.0, 1.0, 0.0), (0.0, 0.0, 1.0)),
    ((1.0, 0.0, 0.0), (0.0, 0.0, 1.0)),
    ((1.0, 0.0, 0.0), (0.0, 0.0, 1.0)),
    ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0)),
    ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0)),
)


def face_quad(slot: int, half: float, offset: float) -> List[Vec3f]:
    """Vértices de un quad paralelo a la cara `slot` de un cubie (coordenadas locales).

    Args:
        slot: Slot de la cara (0..5 = +X, -X, +Y, -Y, +Z, -Z).
        half: Media arista del quad.
        offset: Distancia del quad al centro del cubie, sobre la normal.
    """
    n = SLOT_NORMALS[slot]
    u, v = _SLOT_TANGENTS[slot]
    c = (n[0] * offset, n[1] * offset, n[2] * offset)
    out: List[Vec3f] = []
    for su, sv in ((-1, -1), (1, -1), (1, 1), (-1, 1)):
        out.append((
            c[0] + (u[0] * su + v[0] * sv) * half,
            c[1] + (u[1] * su + v[1] * sv) * half,
            c[2] + (u[2] * su + v[2] * sv) * half,
        ))
    return out


class CubeGLWidget(QOpenGLWidget):
    """Widget OpenGL que dibuja los 27 cubies y traduce el mouse a comandos.

    Características:
    - Render OpenGL clásico (sin shaders), un push/pop de matriz por cubie.
    - Picking por color (funciona con HiDPI): cada sticker tiene un ID.
    - Drag izquierdo sobre un sticker -> `CubeController.on_pointer_*`.
    - Drag derecho -> orbitar cámara; rueda -> zoom.
    - QTimer que avanza el scheduler (`tick`) con el tiempo real transcurrido.
    """

    move_applied = Signal(str)

    def __init__(self, controller: CubeController, parent=None) -> None:
        super().__init__(parent)
        self.controller: CubeController = controller
        self.camera: OrbitCamera = OrbitCamera()

        self._last_mouse_pos: QPoint = QPoint()
        self._orbiting: bool = False
        self._dragging_left: bool = False

        self.sticker_half: float = 0.44
        self.sticker_offset: float = 0.505
        self.core_half: float = 0.5

        self.controller.scheduler.commit_listeners.append(self._on_move_committed)

        self._clock: QElapsedTimer = QElapsedTimer()
        self._frame_timer: QTimer = QTimer(self)
        self._frame_timer.setInterval(FRAME_INTERVAL_MS)
        self._frame_timer.timeout.connect(self._on_frame)
        self._clock.start()
        self._frame_timer.start()

        self.setFocusPolicy(Qt.ClickFocus)

    # --------------------------
    # OpenGL lifecycle
    # --------------------------
    def initializeGL(self) -> None:
        glClearColor(0.10, 0.10, 0.12, 1.0)
        glEnable(GL_DEPTH_TEST)

    def resizeGL(self, w: int, h: int) -> None:
        """Ajusta viewport, proyección y aspecto de la cámara.

        Args:
            w: Ancho lógico del widget (Qt).
            h: Alto lógico del widget (Qt).
        """
        if h == 0:
            h = 1

        dpr = self.devicePixelRatioF()
        fb_w = int(w * dpr)
        fb_h = int(h * dpr)

        glViewport(0, 0, fb_w, fb_h)

        self.camera.aspect = fb_w / float(fb_h)
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(self.camera.fov, self.camera.aspect, 0.1, 100.0)

        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

    def paintGL(self) -> None:
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self._apply_camera()
        for i in range(len(self.controller.store)):
            self._draw_cubie(i)

    def _apply_camera(self) -> None:
        """Aplica la transformación de cámara (orbit); debe coincidir con `OrbitCamera`."""
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()
        glTranslatef(0.0, 0.0, -self.camera.distance)
        glRotatef(self.camera.pitch, 1.0, 0.0, 0.0)
        glRotatef(self.camera.yaw, 0.0, 1.0, 0.0)

    # --------------------------
    # Frame
    # --------------------------
    def _on_frame(self) -> None:
        dt = self._clock.restart() / 1000.0
        was_idle = self.controller.scheduler.idle
        self.controller.tick(dt)
        if not was_idle:
            self.update()

    def _on_move_committed(self, move: Move, indices: Sequence[int]) -> None:
        self.move_applied.emit(move_to_token(move))

    # --------------------------
    # Dibujo
    # --------------------------
    def _draw_cubie(self, index: int) -> None:
        cubie = self.controller.store[index]
        glPushMatrix()
        glMultMatrixf(self.controller.visuals.gl_matrix(index))

        glBegin(GL_QUADS)
        glColor3f(*CORE_RGB)
        for slot in range(6):
            for v in face_quad(slot, self.core_half, self.core_half):
                glVertex3f(*v)

        for slot, color in enumerate(cubie.colors):
            if color is None:
                continue
            glColor3f(*COLOR_RGB.get(color, (0.8, 0.8, 0.8)))
            for v in face_quad(slot, self.sticker_half, self.sticker_offset):
                glVertex3f(*v)
        glEnd()

        glPopMatrix()

    # --------------------------
    # Picking (color picking)
    # --------------------------
    @staticmethod
    def _encode_id_color(pick_id: int) -> Vec3f:
        r = (pick_id & 0xFF) / 255.0
        g = ((pick_id >> 8) & 0xFF) / 255.0
        b = ((pick_id >> 16) & 0xFF) / 255.0
        return (r, g, b)

    def pick_sticker(self, x: int, y: int) -> Optional[StickerHit]:
        """Detecta qué sticker está bajo el cursor usando color picking.

        Args:
            x: Coordenada X en píxeles (Qt, coordenadas del widget).
            y: Coordenada Y en píxeles (Qt, coordenadas del widget).

        Returns:
            (índice de cubie, slot) si hay sticker; None si no.
        """
        dpr = self.devicePixelRatioF()
        gl_x = int(x * dpr)
        gl_y = int((self.height() - y - 1) * dpr)

        self.makeCurrent()
        glDisable(GL_DITHER)
        glDisable(GL_BLEND)

        glClearColor(0.0, 0.0, 0.0, 1.0)
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self._apply_camera()
        mapping = self._draw_pick_pass()
        glFlush()

        pixel = glReadPixels(gl_x, gl_y, 1, 1, GL_RGB, GL_UNSIGNED_BYTE)
        glClearColor(0.10, 0.10, 0.12, 1.0)
        self.doneCurrent()

        if pixel is None:
            return None
        if isinstance(pixel, (bytes, bytearray)):
            r, g, b = pixel[0], pixel[1], pixel[2]
        else:
            flat = list(bytes(pixel))
            r, g, b = flat[0], flat[1], flat[2]

        pick_id = r + (g << 8) + (b << 16)
        return mapping.get(pick_id)

    def _draw_pick_pass(self) -> Dict[int, StickerHit]:
        mapping: Dict[int, StickerHit] = {}
        pick_id = 1
        visuals = self.controller.visuals

        for index, cubie in enumerate(self.controller.store.cubies):
            glPushMatrix()
            glMultMatrixf(visuals.gl_matrix(index))
            glBegin(GL_QUADS)
            for slot, color in enumerate(cubie.colors):
                if color is None:
                    continue
                mapping[pick_id] = (index, slot)
                glColor3f(*self._encode_id_color(pick_id))
                # área de pick = toda la cara del cubie
                for v in face_quad(slot, self.core_half, self.sticker_offset):
                    glVertex3f(*v)
                pick_id += 1
            glEnd()
            glPopMatrix()

        return mapping

    def _contact_for(self, hit: StickerHit, pos: QPoint) -> Tuple[Vec3f, Vec3f]:
        """Punto de contacto bajo el cursor y normal de la cara, en coordenadas de mundo.

        El punto sale de intersectar el rayo de la cámara por `pos` con el plano
        de la cara tomada (transform visual actual del cubie).
        """
        index, slot = hit
        visuals = self.controller.visuals
        n = visuals.world_normal(index, tuple(float(c) for c in SLOT_NORMALS[slot]))
        p = visuals.positions[index]
        h = self.core_half
        center = (p[0] + n[0] * h, p[1] + n[1] * h, p[2] + n[2] * h)
        point = self.camera.intersect_plane(self._to_ndc(pos), center, n)
        if point is None:
            point = center
        return point, n

    def _to_ndc(self, pos: QPoint) -> Tuple[float, float]:
        w = max(1, self.width())
        h = max(1, self.height())
        return (pos.x() / w * 2.0 - 1.0, -(pos.y() / h * 2.0 - 1.0))

    # --------------------------
    # Interacción
    # --------------------------
    def _status(self, msg: str, timeout: int = 1500) -> None:
        w = self.window()
        if hasattr(w, "statusBar") and w.statusBar():
            w.statusBar().showMessage(msg, timeout)
        else:
            logger.info(msg)

    def mousePressEvent(self, event: QMouseEvent) -> None:
        """Botón derecho: orbitar. Botón izquierdo: comenzar gesto sobre un sticker."""
        if event.button() == Qt.RightButton:
            self._orbiting = True
            self._last_mouse_pos = event.pos()
            event.accept()
            return

        if event.button() == Qt.LeftButton:
            hit = self.pick_sticker(event.pos().x(), event.pos().y())
            if hit is None:
                # Fondo: el drag izquierdo también orbita
                self._orbiting = True
                self._last_mouse_pos = event.pos()
            else:
                point, normal = self._contact_for(hit, event.pos())
                self.controller.on_pointer_down(hit[0], point, normal)
                self._dragging_left = True
            self.update()
            event.accept()
            return

        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if self._orbiting:
            dx = event.pos().x() - self._last_mouse_pos.x()
            dy = event.pos().y() - self._last_mouse_pos.y()
            self._last_mouse_pos = event.pos()
            self.camera.orbit(dx, dy)
            self.update()
            event.accept()
            return

        if self._dragging_left and (event.buttons() & Qt.LeftButton):
            move = self.controller.on_pointer_move(self._to_ndc(event.pos()), self.camera.project)
            if move is not None:
                self._dragging_left = False
                self._status(f"Move: {move_to_token(move)}", 1200)
            event.accept()
            return

        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() in (Qt.RightButton, Qt.LeftButton) and self._orbiting:
            self._orbiting = False
            event.accept()
            return

        if event.button() == Qt.LeftButton and self._dragging_left:
            self._dragging_left = False
            self.controller.on_pointer_up()
            event.accept()
            return

        super().mouseReleaseEvent(event)

    def wheelEvent(self, event: QWheelEvent) -> None:
        self.camera.zoom(event.angleDelta().y() / 120.0)
        self.update()
        event.accept()
