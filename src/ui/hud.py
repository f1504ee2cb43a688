"""
HUD overlay: hand presence indicators, tracking prompt and clock.
"""
from PyQt5.QtCore import Qt, QTime, QTimer
from PyQt5.QtWidgets import QLabel, QVBoxLayout, QWidget

from vision.interaction import InteractionStore

HUD_STYLE = """
#HudStatus {
    background-color: rgba(0, 0, 0, 100);
    border: 1px solid #155E75;
    border-radius: 8px;
}
#HudHeader { color: #22D3EE; font-size: 11px; font-weight: bold; }
#HudHand { font-family: monospace; font-size: 12px; color: #7F1D1D; }
#HudHand[present="true"] { color: #67E8F9; }
#HudPrompt {
    color: #06B6D4;
    border: 1px solid #06B6D4;
    background-color: rgba(0, 0, 0, 130);
    padding: 16px;
    font-size: 14px;
}
#HudClock { color: #67E8F9; font-family: monospace; font-size: 20px; }
"""

POLL_INTERVAL_MS = 200


class HudOverlay(QWidget):
    """
    Polls presence flags from the interaction store.
    Shows a prompt while no hand is in view.
    """

    def __init__(self, store: InteractionStore, parent=None):
        super().__init__(parent)
        self.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.setAttribute(Qt.WA_TranslucentBackground)
        self.setStyleSheet(HUD_STYLE)
        self._store = store

        self.status_box = QWidget(self)
        self.status_box.setObjectName("HudStatus")
        box_layout = QVBoxLayout(self.status_box)
        box_layout.setContentsMargins(12, 8, 12, 8)
        header = QLabel("BIO-METRIC SENSORS")
        header.setObjectName("HudHeader")
        box_layout.addWidget(header)
        self.control_label = QLabel()
        self.control_label.setObjectName("HudHand")
        box_layout.addWidget(self.control_label)
        self.ui_label = QLabel()
        self.ui_label.setObjectName("HudHand")
        box_layout.addWidget(self.ui_label)

        self.prompt = QLabel("INITIALIZE HAND TRACKING\nRAISE HANDS TO CAMERA", self)
        self.prompt.setObjectName("HudPrompt")
        self.prompt.setAlignment(Qt.AlignCenter)

        self.clock = QLabel(self)
        self.clock.setObjectName("HudClock")

        self._timer = QTimer(self)
        self._timer.timeout.connect(self.refresh)

    def start(self):
        self.refresh()
        self._timer.start(POLL_INTERVAL_MS)

    def stop(self):
        self._timer.stop()

    def refresh(self):
        snapshot = self._store.snapshot
        self._set_hand(self.control_label, "L-HAND (GLOBE)", snapshot.control.present)
        self._set_hand(self.ui_label, "R-HAND (PANEL)", snapshot.ui.present)
        self.prompt.setVisible(not (snapshot.control.present or snapshot.ui.present))
        self.clock.setText(QTime.currentTime().toString("HH:mm:ss"))
        self.clock.adjustSize()
        self._layout_children()

    @staticmethod
    def _set_hand(label: QLabel, name: str, present: bool):
        label.setText(f"{name:<16} {'[CONNECTED]' if present else '[SEARCHING]'}")
        if label.property("present") != ("true" if present else "false"):
            label.setProperty("present", "true" if present else "false")
            label.style().unpolish(label)
            label.style().polish(label)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._layout_children()

    def _layout_children(self):
        w, h = self.width(), self.height()
        margin = 32
        self.status_box.adjustSize()
        self.status_box.move(margin, h - self.status_box.height() - margin)
        self.prompt.adjustSize()
        self.prompt.move((w - self.prompt.width()) // 2, (h - self.prompt.height()) // 2)
        self.clock.move(w - self.clock.width() - margin, margin)
