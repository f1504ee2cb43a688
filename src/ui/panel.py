"""
Floating intel panel moved by the UI hand.
"""
from typing import Tuple

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import QFrame, QHBoxLayout, QLabel, QVBoxLayout

PANEL_STYLE = """
#DraggablePanel {
    background-color: rgba(0, 0, 0, 150);
    border: 2px solid #00FFFF;
    border-top-right-radius: 24px;
}
#DraggablePanel[engaged="true"] {
    border: 2px solid #FFFFFF;
}
#PanelTitle {
    color: #00FFFF;
    font-size: 16px;
    font-weight: bold;
}
#PanelLock {
    color: #A5F3FC;
    font-size: 11px;
}
#PanelCaption {
    color: #67E8F9;
    font-size: 13px;
}
#PanelRegion {
    color: #FFFFFF;
    font-size: 15px;
    font-weight: bold;
    letter-spacing: 2px;
}
"""


class DraggablePanel(QFrame):
    """Panel showing the region under the globe's view."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("DraggablePanel")
        self.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.setFixedWidth(320)
        self.setStyleSheet(PANEL_STYLE)
        self._engaged = False

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 16)
        layout.setSpacing(12)

        header = QHBoxLayout()
        self.title_label = QLabel("GEO INTEL ANALYSIS")
        self.title_label.setObjectName("PanelTitle")
        header.addWidget(self.title_label)
        header.addStretch()
        self.lock_label = QLabel()
        self.lock_label.setObjectName("PanelLock")
        header.addWidget(self.lock_label)
        layout.addLayout(header)

        row = QHBoxLayout()
        caption = QLabel("Target region:")
        caption.setObjectName("PanelCaption")
        row.addWidget(caption)
        row.addStretch()
        self.region_label = QLabel()
        self.region_label.setObjectName("PanelRegion")
        row.addWidget(self.region_label)
        layout.addLayout(row)

        self._update_style()
        self.adjustSize()

    def set_region(self, region: str):
        self.region_label.setText(region)

    def set_engaged(self, engaged: bool):
        """Border and lock text follow the drag state."""
        if self._engaged != engaged:
            self._engaged = engaged
            self._update_style()

    def set_position(self, position: Tuple[float, float]):
        self.move(int(position[0]), int(position[1]))

    def _update_style(self):
        self.setProperty("engaged", "true" if self._engaged else "false")
        self.lock_label.setText(
            "Position lock: released" if self._engaged else "Position lock: engaged"
        )
        # Force style refresh
        self.style().unpolish(self)
        self.style().polish(self)
