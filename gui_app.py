import logging
import sys
from typing import Callable, Optional

import cv2
from PySide6 import QtCore, QtGui, QtWidgets

from analysis import (
    ScreenState,
    analyze_faces,
    analyze_handwriting,
    analyze_pose,
    analyze_text,
    processing,
)
from capture import capture_still, load_image
from config import AppConfig, parse_args, setup_logging
from errors import ImageLoadError, InferenceError
from face_detection import FaceLandmarkDetector
from feature_registry import FeatureEntry, get_feature_entries
from overlay import emoji_anchor, emoji_font_size, face_annotation_rect, to_pixel_rect
from perception_types import SentimentLabel
from pose_detection import PoseDetector
from sentiment_scoring import SentimentScorer
from text_recognition import TextRecognizer
from visualization import draw_faces, draw_pose, draw_text_boxes

logger = logging.getLogger(__name__)

SAMPLE_TEXTS = [
    ("Positive", "I absolutely loved this movie, the acting was wonderful and the ending made me smile."),
    ("Negative", "The service was terrible and the food arrived cold. I will not be coming back."),
    ("Neutral", "The meeting is scheduled for Tuesday at ten in the second floor conference room."),
]

LABEL_STYLE = "font-size:14px;color:#e6e6e6;"
ERROR_STYLE = "font-size:14px;color:#ff9b9b;"
BUTTON_STYLE = (
    "QPushButton{background:#1f6f5f;color:white;padding:10px 18px;border-radius:10px;font-size:14px;}"
    "QPushButton:hover{background:#249b84;}"
)
SENTIMENT_STYLES = {
    SentimentLabel.POSITIVE: "font-size:18px;font-weight:700;color:#4caf50;",
    SentimentLabel.NEGATIVE: "font-size:18px;font-weight:700;color:#f44336;",
    SentimentLabel.NEUTRAL: "font-size:18px;font-weight:700;color:#9e9e9e;",
}


def sentiment_style(state: ScreenState) -> str:
    if state.result is None:
        return LABEL_STYLE
    return SENTIMENT_STYLES[state.result.label]


def to_pixmap(frame) -> QtGui.QPixmap:
    frame_rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
    h, w, ch = frame_rgb.shape
    bytes_per_line = ch * w
    image = QtGui.QImage(frame_rgb.data, w, h, bytes_per_line, QtGui.QImage.Format_RGB888)
    return QtGui.QPixmap.fromImage(image.copy())


def paint_emojis(pixmap: QtGui.QPixmap, analysis) -> None:
    size = (pixmap.width(), pixmap.height())
    painter = QtGui.QPainter(pixmap)
    try:
        for face, emotion in zip(analysis.faces, analysis.emotions):
            rect = face_annotation_rect(to_pixel_rect(face.bounding_box, size))
            font = painter.font()
            font.setPixelSize(emoji_font_size(rect))
            painter.setFont(font)
            metrics = QtGui.QFontMetrics(font)
            emoji_size = (metrics.horizontalAdvance(emotion.emoji), metrics.height())
            x, y = emoji_anchor(rect, emoji_size)
            painter.drawText(QtCore.QRect(x, y, emoji_size[0], emoji_size[1]), 0, emotion.emoji)
    finally:
        painter.end()


class SentimentPage(QtWidgets.QWidget):
    def __init__(self, entry: FeatureEntry, cfg: AppConfig, parent=None):
        super().__init__(parent)
        self._cfg = cfg
        self._scorer: Optional[SentimentScorer] = None
        self.state = ScreenState()

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(12)

        title = QtWidgets.QLabel(entry.name)
        title.setStyleSheet("font-size:24px;font-weight:700;color:#f2f2f2;")
        if entry.classifier is not None:
            title.setToolTip("\n".join(entry.classifier.describe()))
        layout.addWidget(title)

        samples = QtWidgets.QHBoxLayout()
        for name, text in SAMPLE_TEXTS:
            btn = QtWidgets.QPushButton(name)
            btn.clicked.connect(lambda _=False, t=text: self.editor.setPlainText(t))
            samples.addWidget(btn)
        layout.addWidget(QtWidgets.QLabel("Sample texts:"))
        layout.addLayout(samples)

        self.editor = QtWidgets.QPlainTextEdit()
        self.editor.setPlaceholderText(entry.hint)
        layout.addWidget(self.editor, 1)

        analyze_btn = QtWidgets.QPushButton("Analyze Sentiment")
        analyze_btn.setStyleSheet(BUTTON_STYLE)
        analyze_btn.clicked.connect(self._analyze)
        layout.addWidget(analyze_btn)

        self.result_label = QtWidgets.QLabel("")
        self.result_label.setStyleSheet(LABEL_STYLE)
        self.error_label = QtWidgets.QLabel("")
        self.error_label.setStyleSheet(ERROR_STYLE)
        layout.addWidget(self.result_label)
        layout.addWidget(self.error_label)

    def _analyze(self):
        self._show(processing())
        if self._scorer is None:
            try:
                self._scorer = SentimentScorer(self._cfg.sentiment_model)
            except InferenceError as exc:
                self._show(ScreenState(error=str(exc)))
                return
        self._show(analyze_text(self._scorer, self.editor.toPlainText()))

    def close_collaborator(self):
        if self._scorer is not None:
            self._scorer.close()
            self._scorer = None

    def _show(self, state: ScreenState):
        self.state = state
        self.result_label.setStyleSheet(sentiment_style(state))
        self.result_label.setText("\n".join(state.result.summary()) if state.result else "")
        self.error_label.setText(state.error or ("Analyzing..." if state.processing else ""))
        QtWidgets.QApplication.processEvents()


class ImagePage(QtWidgets.QWidget):
    def __init__(self, entry: FeatureEntry, cfg: AppConfig, load: Callable, analyze: Callable, annotate: Callable, parent=None):
        super().__init__(parent)
        self._cfg = cfg
        self._load = load
        self._analyze = analyze
        self._annotate = annotate
        self._collaborator = None
        self.state = ScreenState()

        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(16)

        self.image_label = QtWidgets.QLabel(entry.hint)
        self.image_label.setAlignment(QtCore.Qt.AlignCenter)
        self.image_label.setMinimumSize(640, 480)
        self.image_label.setStyleSheet("background:#101214; border-radius:12px;color:#b9c0c5;")

        right_panel = QtWidgets.QVBoxLayout()
        right_panel.setSpacing(12)
        title = QtWidgets.QLabel(entry.name)
        title.setStyleSheet("font-size:22px;font-weight:700;color:#f2f2f2;")
        if entry.classifier is not None:
            title.setToolTip("\n".join(entry.classifier.describe()))
        choose_btn = QtWidgets.QPushButton("Choose Photo")
        camera_btn = QtWidgets.QPushButton("Take Photo")
        for btn in (choose_btn, camera_btn):
            btn.setStyleSheet(BUTTON_STYLE)
        choose_btn.clicked.connect(self._choose_photo)
        camera_btn.clicked.connect(self._take_photo)

        self.result_label = QtWidgets.QLabel("")
        self.result_label.setStyleSheet(LABEL_STYLE)
        self.result_label.setWordWrap(True)
        self.result_label.setTextInteractionFlags(QtCore.Qt.TextSelectableByMouse)
        self.error_label = QtWidgets.QLabel("")
        self.error_label.setStyleSheet(ERROR_STYLE)

        right_panel.addWidget(title)
        right_panel.addWidget(choose_btn)
        right_panel.addWidget(camera_btn)
        right_panel.addWidget(self.result_label)
        right_panel.addWidget(self.error_label)
        right_panel.addStretch(1)

        layout.addWidget(self.image_label, 1)
        layout.addLayout(right_panel)

    def _choose_photo(self):
        path, _ = QtWidgets.QFileDialog.getOpenFileName(self, "Choose Photo", "", "Images (*.png *.jpg *.jpeg *.bmp)")
        if not path:
            return
        try:
            frame = load_image(path)
        except ImageLoadError as exc:
            self._show(ScreenState(error=str(exc)), None)
            return
        self._run(frame)

    def _take_photo(self):
        still = capture_still(self._cfg.camera_index)
        if not still.ok:
            logger.warning("Camera capture failed on index %d", self._cfg.camera_index)
            self._show(ScreenState(error="Camera error"), None)
            return
        self._run(still.frame)

    def _run(self, frame):
        self._show(processing(), None)
        if self._collaborator is None:
            try:
                self._collaborator = self._load(self._cfg)
            except InferenceError as exc:
                self._show(ScreenState(error=str(exc)), frame)
                return
        state = self._analyze(self._collaborator, frame)
        pixmap = None
        if state.result is not None:
            pixmap = self._annotate(frame, state.result)
        self._show(state, frame, pixmap)

    def close_collaborator(self):
        if self._collaborator is not None:
            self._collaborator.close()
            self._collaborator = None

    def _show(self, state: ScreenState, frame, pixmap: Optional[QtGui.QPixmap] = None):
        self.state = state
        self.result_label.setText("\n".join(state.result.summary()) if state.result else "")
        self.error_label.setText(state.error or ("Analyzing..." if state.processing else ""))
        if pixmap is None and frame is not None:
            pixmap = to_pixmap(frame)
        if pixmap is not None:
            self.image_label.setPixmap(pixmap.scaled(self.image_label.size(), QtCore.Qt.KeepAspectRatio))
        QtWidgets.QApplication.processEvents()


def _annotate_faces(frame, result) -> QtGui.QPixmap:
    draw_faces(frame, result.faces, result.emotions)
    pixmap = to_pixmap(frame)
    paint_emojis(pixmap, result)
    return pixmap


def _annotate_text(frame, result) -> QtGui.QPixmap:
    draw_text_boxes(frame, result.regions)
    return to_pixmap(frame)


def _pose_annotator(cfg: AppConfig) -> Callable:
    def annotate(frame, result) -> QtGui.QPixmap:
        draw_pose(frame, result.keypoints, cfg.min_draw_confidence)
        return to_pixmap(frame)

    return annotate


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, cfg: AppConfig):
        super().__init__()
        self._cfg = cfg
        self.setWindowTitle("Perception Demo")
        self.resize(1280, 760)
        self._setup_ui()

    def _setup_ui(self):
        self.setStyleSheet("QMainWindow{background:#0f1113;}")
        cfg = self._cfg

        root = QtWidgets.QWidget()
        self.setCentralWidget(root)
        layout = QtWidgets.QHBoxLayout(root)
        layout.setContentsMargins(0, 0, 0, 0)

        nav = QtWidgets.QFrame()
        nav.setFixedWidth(200)
        nav.setStyleSheet("QFrame{background:#0c0e10;border-right:1px solid #22262a;}")
        nav_layout = QtWidgets.QVBoxLayout(nav)
        nav_layout.setContentsMargins(12, 20, 12, 12)
        nav_layout.setSpacing(10)

        self.stack = QtWidgets.QStackedWidget()
        self.pages = []
        for entry in get_feature_entries():
            if entry.key == "sentiment":
                page = SentimentPage(entry, cfg)
            elif entry.key == "face":
                page = ImagePage(
                    entry, cfg,
                    lambda c: FaceLandmarkDetector(c.face_model, max_faces=c.max_faces),
                    analyze_faces, _annotate_faces,
                )
            elif entry.key == "text":
                page = ImagePage(
                    entry, cfg,
                    lambda c: TextRecognizer(c.text_detector, c.text_recognizer, c.text_vocabulary),
                    analyze_handwriting, _annotate_text,
                )
            else:
                page = ImagePage(entry, cfg, lambda c: PoseDetector(c.pose_model), analyze_pose, _pose_annotator(cfg))
            self.pages.append(page)
            self.stack.addWidget(page)
            btn = QtWidgets.QPushButton(entry.name)
            btn.setStyleSheet(
                "QPushButton{background:#15181b;color:#e6e6e6;padding:10px;border-radius:8px;text-align:left;}"
                "QPushButton:hover{background:#1a1f24;}"
            )
            idx = len(self.pages) - 1
            btn.clicked.connect(lambda _=False, i=idx: self.stack.setCurrentIndex(i))
            nav_layout.addWidget(btn)
        nav_layout.addStretch(1)

        layout.addWidget(nav)
        layout.addWidget(self.stack, 1)

    def closeEvent(self, event):
        for page in self.pages:
            page.close_collaborator()
        super().closeEvent(event)


def main():
    cfg = parse_args(sys.argv[1:])
    setup_logging(cfg)
    app = QtWidgets.QApplication(sys.argv[:1])
    window = MainWindow(cfg)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
