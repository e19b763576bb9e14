import os

import cv2
import numpy as np
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6 import QtGui, QtWidgets  # noqa: E402

import app  # noqa: E402
import gui_app  # noqa: E402
from analysis import ScreenState, SentimentAnalysis  # noqa: E402
from config import AppConfig  # noqa: E402
from perception_types import SentimentLabel  # noqa: E402


class ClosingFake:
    instances = []

    def __init__(self, *args, **kwargs):
        self.closed = False
        ClosingFake.instances.append(self)

    def score(self, text):
        return 0.8

    def detect(self, frame):
        return []

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def reset_fakes():
    ClosingFake.instances = []


def test_cli_closes_sentiment_scorer(monkeypatch, capsys):
    monkeypatch.setattr(app, "SentimentScorer", ClosingFake)
    assert app.run(["sentiment", "What a lovely day"]) == 0
    assert "Sentiment: Positive" in capsys.readouterr().out
    assert [f.closed for f in ClosingFake.instances] == [True]


def test_cli_closes_detector_when_analysis_reports_error(monkeypatch, tmp_path):
    image = tmp_path / "blank.png"
    cv2.imwrite(str(image), np.zeros((20, 20, 3), dtype=np.uint8))
    monkeypatch.setattr(app, "FaceLandmarkDetector", ClosingFake)

    status = app.run(["face", str(image), "--output", str(tmp_path / "out.png")])

    assert status == 1
    assert [f.closed for f in ClosingFake.instances] == [True]


@pytest.fixture
def qapp():
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


def test_closing_window_closes_page_collaborators(qapp):
    window = gui_app.MainWindow(AppConfig())
    fakes = []
    for page in window.pages:
        fake = ClosingFake()
        if isinstance(page, gui_app.SentimentPage):
            page._scorer = fake
        else:
            page._collaborator = fake
        fakes.append(fake)

    window.closeEvent(QtGui.QCloseEvent())

    assert len(fakes) == 4
    assert all(f.closed for f in fakes)
    # A second close has nothing left to release.
    window.closeEvent(QtGui.QCloseEvent())


@pytest.mark.parametrize(
    "label, colour",
    [
        (SentimentLabel.POSITIVE, "#4caf50"),
        (SentimentLabel.NEGATIVE, "#f44336"),
        (SentimentLabel.NEUTRAL, "#9e9e9e"),
    ],
)
def test_sentiment_label_colour_follows_polarity(label, colour):
    assert colour in gui_app.sentiment_style(ScreenState(result=SentimentAnalysis(label)))


def test_sentiment_style_without_result():
    assert gui_app.sentiment_style(ScreenState(error="boom")) == gui_app.LABEL_STYLE
