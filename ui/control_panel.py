"""
Control Panel
Text entry, layout and timing controls, and playback/export buttons
"""

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QFormLayout, QLabel,
    QComboBox, QPushButton, QSpinBox, QDoubleSpinBox,
    QCheckBox, QGroupBox, QScrollArea, QPlainTextEdit
)
from PyQt6.QtCore import Qt, pyqtSignal

from core.data_structures import (
    Alignment,
    DurationMode,
    DurationUnit,
    ProjectSettings,
    TimingMode,
)
from utils.video_export import VIDEO_FORMATS


class ControlPanel(QWidget):
    """Control panel with all main controls"""

    # Signals
    settings_changed = pyqtSignal()
    load_folder_clicked = pyqtSignal()
    play_clicked = pyqtSignal()
    reset_clicked = pyqtSignal()
    export_frames_clicked = pyqtSignal()
    export_video_clicked = pyqtSignal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._updating = False

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)

        scroll_widget = QWidget()
        self.main_layout = QVBoxLayout(scroll_widget)

        self.init_ui()

        scroll.setWidget(scroll_widget)

        container_layout = QVBoxLayout(self)
        container_layout.setContentsMargins(0, 0, 0, 0)
        container_layout.addWidget(scroll, stretch=1)

    def init_ui(self):
        """Build every control group"""
        # Letters
        letters_group = QGroupBox("Letters")
        letters_layout = QVBoxLayout(letters_group)
        self.load_folder_btn = QPushButton("Load Letter Folder...")
        self.load_folder_btn.clicked.connect(self.load_folder_clicked)
        letters_layout.addWidget(self.load_folder_btn)
        self.pack_combo = QComboBox()
        self.pack_combo.setEnabled(False)
        letters_layout.addWidget(self.pack_combo)
        self.library_label = QLabel("No letters loaded")
        self.library_label.setWordWrap(True)
        letters_layout.addWidget(self.library_label)
        self.main_layout.addWidget(letters_group)

        # Text
        text_group = QGroupBox("Text")
        text_layout = QVBoxLayout(text_group)
        self.text_edit = QPlainTextEdit()
        self.text_edit.setMaximumHeight(90)
        self.text_edit.textChanged.connect(self._emit_changed)
        text_layout.addWidget(self.text_edit)
        self.main_layout.addWidget(text_group)

        # Layout
        layout_group = QGroupBox("Layout")
        form = QFormLayout(layout_group)
        self.alignment_combo = self._enum_combo(Alignment)
        form.addRow("Alignment:", self.alignment_combo)
        self.spacing_spin = self._int_spin(-500, 500)
        form.addRow("Spacing:", self.spacing_spin)
        self.char_spacing_spin = self._int_spin(-500, 500)
        form.addRow("Char spacing:", self.char_spacing_spin)
        self.line_spacing_spin = self._int_spin(-500, 500)
        form.addRow("Line spacing:", self.line_spacing_spin)
        self.main_layout.addWidget(layout_group)

        # Timing
        timing_group = QGroupBox("Timing")
        form = QFormLayout(timing_group)
        self.fps_spin = QDoubleSpinBox()
        self.fps_spin.setRange(1, 120)
        self.fps_spin.setDecimals(0)
        self.fps_spin.valueChanged.connect(self._emit_changed)
        form.addRow("FPS:", self.fps_spin)
        self.fps_source_label = QLabel("")
        form.addRow("", self.fps_source_label)
        self.timing_combo = self._enum_combo(TimingMode)
        self.timing_combo.currentIndexChanged.connect(self._update_enabled_state)
        form.addRow("Timing:", self.timing_combo)
        self.stagger_spin = self._int_spin(0, 1000)
        form.addRow("Stagger frames:", self.stagger_spin)
        self.duration_combo = self._enum_combo(DurationMode)
        self.duration_combo.currentIndexChanged.connect(self._update_enabled_state)
        form.addRow("Duration:", self.duration_combo)
        duration_row = QHBoxLayout()
        self.custom_duration_spin = QDoubleSpinBox()
        self.custom_duration_spin.setRange(0, 100000)
        self.custom_duration_spin.setDecimals(2)
        self.custom_duration_spin.valueChanged.connect(self._emit_changed)
        duration_row.addWidget(self.custom_duration_spin)
        self.duration_unit_combo = self._enum_combo(DurationUnit)
        duration_row.addWidget(self.duration_unit_combo)
        form.addRow("Custom:", duration_row)
        self.hold_check = QCheckBox("Hold last frame")
        self.hold_check.toggled.connect(self._emit_changed)
        form.addRow(self.hold_check)
        self.reserve_slots_check = QCheckBox("Missing letters keep their stagger slot")
        self.reserve_slots_check.toggled.connect(self._emit_changed)
        form.addRow(self.reserve_slots_check)
        self.duration_info_label = QLabel("")
        form.addRow(self.duration_info_label)
        self.main_layout.addWidget(timing_group)

        # Playback / export
        playback_group = QGroupBox("Playback")
        playback_layout = QHBoxLayout(playback_group)
        self.play_btn = QPushButton("Play")
        self.play_btn.clicked.connect(self.play_clicked)
        playback_layout.addWidget(self.play_btn)
        self.reset_btn = QPushButton("Reset")
        self.reset_btn.clicked.connect(self.reset_clicked)
        playback_layout.addWidget(self.reset_btn)
        self.export_btn = QPushButton("Export Frames...")
        self.export_btn.clicked.connect(self.export_frames_clicked)
        playback_layout.addWidget(self.export_btn)
        self.main_layout.addWidget(playback_group)

        # Video export
        video_group = QGroupBox("Video Export")
        video_layout = QHBoxLayout(video_group)
        self.video_format_combo = QComboBox()
        for key, video_format in VIDEO_FORMATS.items():
            self.video_format_combo.addItem(f"{video_format.name} (.{video_format.extension})", key)
        video_layout.addWidget(self.video_format_combo, stretch=1)
        self.export_video_btn = QPushButton("Export Video...")
        self.export_video_btn.clicked.connect(
            lambda: self.export_video_clicked.emit(self.video_format_combo.currentData())
        )
        video_layout.addWidget(self.export_video_btn)
        self.main_layout.addWidget(video_group)

        self.main_layout.addStretch()

    def _int_spin(self, minimum: int, maximum: int) -> QSpinBox:
        spin = QSpinBox()
        spin.setRange(minimum, maximum)
        spin.valueChanged.connect(self._emit_changed)
        return spin

    def _enum_combo(self, enum_cls) -> QComboBox:
        combo = QComboBox()
        for member in enum_cls:
            combo.addItem(member.value.capitalize(), member)
        combo.currentIndexChanged.connect(self._emit_changed)
        return combo

    @staticmethod
    def _select(combo: QComboBox, member):
        index = combo.findData(member)
        if index >= 0:
            combo.setCurrentIndex(index)

    def _emit_changed(self, *_args):
        if not self._updating:
            self.settings_changed.emit()

    def _update_enabled_state(self, *_args):
        self.stagger_spin.setEnabled(self.timing_combo.currentData() is TimingMode.STAGGER)
        custom = self.duration_combo.currentData() is DurationMode.CUSTOM
        self.custom_duration_spin.setEnabled(custom)
        self.duration_unit_combo.setEnabled(custom)

    def set_settings(self, settings: ProjectSettings):
        """Show ``settings`` without emitting change signals"""
        self._updating = True
        try:
            if self.text_edit.toPlainText() != settings.text:
                self.text_edit.setPlainText(settings.text)
            self._select(self.alignment_combo, settings.alignment)
            self.spacing_spin.setValue(settings.spacing)
            self.char_spacing_spin.setValue(settings.char_spacing)
            self.line_spacing_spin.setValue(settings.line_spacing)
            self.fps_spin.setValue(settings.fps)
            self._select(self.timing_combo, settings.timing_mode)
            self.stagger_spin.setValue(settings.stagger_frames)
            self._select(self.duration_combo, settings.duration_mode)
            self.custom_duration_spin.setValue(settings.custom_duration_value)
            self._select(self.duration_unit_combo, settings.duration_unit)
            self.hold_check.setChecked(settings.hold_last_frame)
            self.reserve_slots_check.setChecked(settings.reserve_missing_slots)
        finally:
            self._updating = False
        self._update_enabled_state()

    def get_settings(self) -> ProjectSettings:
        """Settings currently entered in the panel"""
        return ProjectSettings(
            text=self.text_edit.toPlainText(),
            spacing=self.spacing_spin.value(),
            char_spacing=self.char_spacing_spin.value(),
            line_spacing=self.line_spacing_spin.value(),
            alignment=self.alignment_combo.currentData(),
            fps=self.fps_spin.value(),
            timing_mode=self.timing_combo.currentData(),
            stagger_frames=self.stagger_spin.value(),
            duration_mode=self.duration_combo.currentData(),
            custom_duration_value=self.custom_duration_spin.value(),
            duration_unit=self.duration_unit_combo.currentData(),
            hold_last_frame=self.hold_check.isChecked(),
            reserve_missing_slots=self.reserve_slots_check.isChecked(),
        )

    def set_play_button_text(self, text: str):
        self.play_btn.setText(text)

    def set_content_available(self, available: bool):
        self.play_btn.setEnabled(available)
        self.reset_btn.setEnabled(available)
        self.export_btn.setEnabled(available)
        self.export_video_btn.setEnabled(available)
