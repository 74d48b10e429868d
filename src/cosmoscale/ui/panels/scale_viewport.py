"""3D viewport panel for Cosmoscale.

Draws every catalog object as a sphere placed in front of the origin at
its own distance, with its name and size overlaid as text. The camera
distance comes from the journey's navigator each frame, so the near and
far clip planes are rebuilt around the current zoom.
"""

from pathlib import Path

from loguru import logger
from PIL import Image

from PySide6.QtCore import Qt, QEvent, QPointF, QTimer, Signal
from PySide6.QtGui import QColor, QEventPoint, QFont, QFontMetricsF, QPainter
from PySide6.QtWidgets import QWidget, QVBoxLayout
from PySide6.QtOpenGLWidgets import QOpenGLWidget

from OpenGL.GL import *  # noqa: F403, F401
from OpenGL.GLU import (
    GLU_SMOOTH,
    gluLookAt,
    gluNewQuadric,
    gluPerspective,
    gluProject,
    gluQuadricNormals,
    gluQuadricTexture,
    gluSphere,
)

from cosmoscale.config.manager import ConfigManager
from cosmoscale.core.catalog import LabelEntry, label_offset_factor
from cosmoscale.core.journey import Frame, ScaleJourney


_ASSETS_DIR = Path(__file__).parent.parent.parent / "assets"

# Clip planes around the camera distance; objects far off scale are culled
_NEAR_FRACTION = 1e-3
_FAR_MULTIPLE = 1e4

_DISTANCE_TEXT_RATIO = 0.7


class ScaleViewportWidget(QOpenGLWidget):
    """OpenGL widget driving and drawing a scale journey."""

    frame_advanced = Signal(object)

    def __init__(self, journey: ScaleJourney, config: ConfigManager, parent=None):
        super().__init__(parent)
        self._journey = journey
        self._config = config
        self._frame: Frame | None = None

        self._fov = config.get("viewport", "camera_fov", 50.0)
        self._near_clip = config.get("viewport", "near_clip", 1e-9)
        self._far_clip = config.get("viewport", "far_clip", 1e28)
        self._slices = config.get("viewport", "sphere_slices", 24)
        self._stacks = config.get("viewport", "sphere_stacks", 12)
        textures_dir = config.get("viewport", "textures_directory", "")
        self._textures_dir = Path(textures_dir) if textures_dir else _ASSETS_DIR

        self._show_labels = config.get("appearance", "show_labels", True)
        self._font_family = config.get("appearance", "label_font_family", "Helvetica")
        self._min_label_px = config.get("appearance", "min_label_px", 4)
        self._max_label_px = config.get("appearance", "max_label_px", 220)

        self._quadric = None
        self._textures: dict[str, int | None] = {}
        self._viewport_px = (1, 1)

        journey.viewport.add_resize_listener(self._on_renderer_resized)
        config.add_listener(self._on_config_changed)

        self._timer = QTimer(self)
        self._timer.setInterval(config.get("viewport", "frame_interval_ms", 16))
        self._timer.timeout.connect(self._on_frame)

        self.setMinimumSize(320, 240)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setAttribute(Qt.WidgetAttribute.WA_AcceptTouchEvents)

    @property
    def journey(self) -> ScaleJourney:
        return self._journey

    def start(self):
        self._timer.start()

    def stop(self):
        self._timer.stop()

    def _on_frame(self):
        self._frame = self._journey.advance()
        self.frame_advanced.emit(self._frame)
        self.update()

    def _on_renderer_resized(self, width: int, height: int):
        ratio = self.devicePixelRatioF()
        self._viewport_px = (max(1, round(width * ratio)), max(1, round(height * ratio)))

    def _on_config_changed(self, group, key, new_value, old_value):
        if group == "appearance" and key == "show_labels":
            self._show_labels = bool(new_value)
            self.update()

    # -------------------------------------------------------------------
    # GL lifecycle
    # -------------------------------------------------------------------

    def initializeGL(self):
        bg = QColor(self._config.get("appearance", "viewport_background", "#000000"))
        glClearColor(bg.redF(), bg.greenF(), bg.blueF(), 1.0)
        self._quadric = gluNewQuadric()
        gluQuadricNormals(self._quadric, GLU_SMOOTH)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._journey.viewport.request_size(self.width(), self.height())

    def paintGL(self):
        self._setup_gl_state()
        width, height = self._viewport_px
        glViewport(0, 0, width, height)
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)

        if self._frame is None:
            return

        self._apply_camera(self._frame)
        anchors = []
        for index, entry in enumerate(self._journey.catalog):
            self._draw_entry(entry)
            if self._show_labels:
                anchor = self._project_label(index, entry)
                if anchor is not None:
                    anchors.append(anchor)

        if anchors:
            self._draw_labels(anchors)

    def _setup_gl_state(self):
        """Restore fixed-function state; QPainter resets it every frame."""
        glEnable(GL_DEPTH_TEST)
        glEnable(GL_NORMALIZE)
        glEnable(GL_LIGHT0)
        glEnable(GL_COLOR_MATERIAL)
        glColorMaterial(GL_FRONT_AND_BACK, GL_AMBIENT_AND_DIFFUSE)
        glLightModelfv(GL_LIGHT_MODEL_AMBIENT, (0.27, 0.27, 0.27, 1.0))
        glLightfv(GL_LIGHT0, GL_DIFFUSE, (1.0, 1.0, 1.0, 1.0))
        glMaterialfv(GL_FRONT_AND_BACK, GL_SPECULAR, (0.07, 0.07, 0.07, 1.0))
        glMaterialf(GL_FRONT_AND_BACK, GL_SHININESS, 50.0)

    def _apply_camera(self, frame: Frame):
        """Set projection and modelview for the frame's camera pose."""
        zoom = frame.zoom
        near = max(self._near_clip, zoom * _NEAR_FRACTION)
        far = min(self._far_clip, zoom * _FAR_MULTIPLE)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(self._fov, self._journey.viewport.aspect, near, far)

        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()
        pose = frame.pose
        gluLookAt(*pose.position, *pose.target, 0.0, 1.0, 0.0)

        # Directional light from (1, 1, 1), fixed in world space
        glLightfv(GL_LIGHT0, GL_POSITION, (1.0, 1.0, 1.0, 0.0))

    def _draw_entry(self, entry: LabelEntry):
        size = entry.actual_size_m
        texture = self._texture_for(entry)

        glPushMatrix()
        glTranslated(0.0, -size * 0.25, -size)
        glScaled(size, size, size)

        if entry.glows:
            glDisable(GL_LIGHTING)
        else:
            glEnable(GL_LIGHTING)
        glColor3f(*entry.display_color)

        if texture is not None:
            glEnable(GL_TEXTURE_2D)
            glBindTexture(GL_TEXTURE_2D, texture)
        gluQuadricTexture(self._quadric, GL_TRUE if texture is not None else GL_FALSE)
        gluSphere(self._quadric, 0.5, self._slices, self._stacks)
        if texture is not None:
            glDisable(GL_TEXTURE_2D)

        glPopMatrix()
        glDisable(GL_LIGHTING)

    # -------------------------------------------------------------------
    # Labels
    # -------------------------------------------------------------------

    def _project_label(self, index: int, entry: LabelEntry):
        """Return (x, y, pixel_size, entry) in widget coordinates, or None if hidden."""
        size = entry.display_size * entry.display_scale
        anchor_y = size * label_offset_factor(index)

        modelview = glGetDoublev(GL_MODELVIEW_MATRIX)
        projection = glGetDoublev(GL_PROJECTION_MATRIX)
        viewport = glGetIntegerv(GL_VIEWPORT)

        bx, by, bz = gluProject(0.0, anchor_y, -size, modelview, projection, viewport)
        _, ty, _ = gluProject(0.0, anchor_y + size, -size, modelview, projection, viewport)
        if not 0.0 <= bz <= 1.0:
            return None

        ratio = self.devicePixelRatioF()
        pixel_size = abs(ty - by) / ratio
        if not self._min_label_px <= pixel_size <= self._max_label_px:
            return None

        x = bx / ratio
        y = (self._viewport_px[1] - by) / ratio
        return x, y, pixel_size, entry

    def _draw_labels(self, anchors):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)

        for x, y, pixel_size, entry in anchors:
            name_font = QFont(self._font_family)
            name_font.setPixelSize(max(1, round(pixel_size)))
            distance_font = QFont(self._font_family)
            distance_font.setPixelSize(max(1, round(pixel_size * _DISTANCE_TEXT_RATIO)))

            name_width = QFontMetricsF(name_font).horizontalAdvance(entry.name)
            left = x - name_width / 2

            painter.setPen(QColor.fromRgbF(*entry.display_color))
            painter.setFont(name_font)
            painter.drawText(QPointF(left, y), entry.name)
            painter.setFont(distance_font)
            painter.drawText(QPointF(left + name_width, y), f" ({entry.distance_label})")

        painter.end()

    # -------------------------------------------------------------------
    # Textures
    # -------------------------------------------------------------------

    def _texture_for(self, entry: LabelEntry) -> int | None:
        if not entry.texture_id:
            return None
        if entry.texture_id not in self._textures:
            self._textures[entry.texture_id] = self._load_texture(self._textures_dir / entry.texture_id)
        return self._textures[entry.texture_id]

    def _load_texture(self, path: Path) -> int | None:
        """Upload an image as a GL texture; None (plain color) if it can't be read."""
        if not path.exists():
            logger.warning(f"Texture not found, using plain color: {path}")
            return None
        try:
            with Image.open(path) as img:
                rgba = img.convert("RGBA").transpose(Image.Transpose.FLIP_TOP_BOTTOM)
                width, height = rgba.size
                data = rgba.tobytes()
        except OSError as e:
            logger.warning(f"Failed to read texture {path}: {e}")
            return None

        texture = glGenTextures(1)
        glBindTexture(GL_TEXTURE_2D, texture)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, GL_LINEAR)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, GL_LINEAR)
        glTexImage2D(GL_TEXTURE_2D, 0, GL_RGBA, width, height, 0, GL_RGBA, GL_UNSIGNED_BYTE, data)
        glBindTexture(GL_TEXTURE_2D, 0)
        logger.debug(f"Loaded texture {path.name} ({width}x{height})")
        return texture

    # -------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------

    def mouseMoveEvent(self, event):
        pos = event.position()
        self._journey.pointer_moved(pos.x(), pos.y(), self.width(), self.height())

    def wheelEvent(self, event):
        delta = event.angleDelta().y()
        if delta == 0:
            delta = event.pixelDelta().y()
        # Qt reports scrolling away from the user as positive; that zooms in
        self._journey.wheel(-delta)
        event.accept()

    def event(self, event):
        kind = event.type()
        if kind in (QEvent.Type.TouchBegin, QEvent.Type.TouchUpdate):
            points = [
                (p.position().x(), p.position().y())
                for p in event.points()
                if p.state() != QEventPoint.State.Released
            ]
            if kind == QEvent.Type.TouchBegin:
                self._journey.pinch_begin(points)
                event.accept()
                return True
            if self._journey.pinch_move(points):
                # Two fingers: swallow the event so no default gesture runs
                event.accept()
                return True
        elif kind in (QEvent.Type.TouchEnd, QEvent.Type.TouchCancel):
            self._journey.pinch_end()
            event.accept()
            return True
        return super().event(event)

    def keyPressEvent(self, event):
        if event.key() == Qt.Key.Key_Home:
            self._journey.reset()
        else:
            super().keyPressEvent(event)


class ScaleViewportPanel(QWidget):
    """Central panel hosting the scale viewport."""

    def __init__(self, journey: ScaleJourney, config: ConfigManager, parent=None):
        super().__init__(parent)
        self._config = config

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._gl_widget = ScaleViewportWidget(journey, config)
        layout.addWidget(self._gl_widget)

    @property
    def gl_widget(self) -> ScaleViewportWidget:
        return self._gl_widget
