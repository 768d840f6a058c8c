# NOTE: The viewer needs PyQt5.
#
# Installation (in terminal):
#   pip install PyQt5
import logging
import os
import sys

from PyQt5.QtWidgets import (
    QApplication, QWidget, QVBoxLayout, QPushButton, QLabel, QComboBox,
    QFileDialog, QTextEdit, QHBoxLayout, QInputDialog, QMessageBox
)
from PyQt5.QtGui import QPixmap, QImage, qRgb
from PyQt5.QtCore import Qt

from bmp_parser import BMPParser
from bmp_writer import write_image
from bmp_errors import BMPError
from bmp_operations import OPERATIONS, apply_operation, param_default
from bmp_settings import get_settings
from bmp_utils import read_file_bytes

logger = logging.getLogger(__name__)


def format_metadata(metadata):
    return "".join(f"{k}: {v}\n" for k, v in metadata.items())


def ensure_bmp_extension(filepath):
    if filepath.lower().endswith(".bmp"):
        return filepath
    return filepath + ".bmp"


def pixels_to_qimage(pixels):
    height = len(pixels)
    width = len(pixels[0])
    image = QImage(width, height, QImage.Format_RGB32)
    for y, row in enumerate(pixels):
        for x, (R, G, B) in enumerate(row):
            image.setPixel(x, y, qRgb(R, G, B))
    return image


class BMPViewer(QWidget):
    def __init__(self, settings=None):
        super().__init__()
        self.settings = settings or get_settings()
        self.setWindowTitle("BMP Image Processor")
        self.resize(700, 500)

        # Pixels as loaded from disk and after the applied operations
        self.original_pixels = None
        self.pixels = None
        self.current_filepath = None

        layout = QVBoxLayout()

        top_layout = QHBoxLayout()

        # Button to open BMP file
        self.open_button = QPushButton("Open BMP File")
        self.open_button.setFixedSize(150, 50)
        self.open_button.clicked.connect(self.open_file)
        top_layout.addWidget(self.open_button)

        # Button to save the processed image
        self.save_button = QPushButton("Save BMP As")
        self.save_button.setFixedSize(150, 50)
        self.save_button.clicked.connect(self.save_file)
        top_layout.addWidget(self.save_button)

        top_layout.addStretch()

        # Operation picker, one entry per operation
        self.operation_box = QComboBox()
        for op in OPERATIONS:
            self.operation_box.addItem(f"{op.number}) {op.label}", op.key)
        top_layout.addWidget(self.operation_box)

        self.apply_button = QPushButton("Apply")
        self.apply_button.clicked.connect(self.apply_selected)
        top_layout.addWidget(self.apply_button)

        self.reset_button = QPushButton("Reset")
        self.reset_button.clicked.connect(self.reset_image)
        top_layout.addWidget(self.reset_button)

        layout.addLayout(top_layout)

        # Label to display the image
        self.image_label = QLabel("No Image Loaded")
        self.image_label.setStyleSheet("border: 1px solid black; background: white;")
        self.image_label.setAlignment(Qt.AlignCenter)
        self.image_label.setFixedSize(700, 400)
        layout.addWidget(self.image_label)

        # Text box to display BMP metadata and the operation log
        self.metadata_box = QTextEdit("No Metadata Loaded")
        self.metadata_box.setMinimumHeight(150)
        self.metadata_box.setReadOnly(True)
        layout.addWidget(self.metadata_box)

        self.setLayout(layout)

    # Open BMP file and load pixel data
    def open_file(self):
        filepath, _ = QFileDialog.getOpenFileName(self, "Open BMP File", "", "BMP Files (*.bmp)")
        if not filepath:
            return

        try:
            parser = BMPParser(read_file_bytes(filepath), strict=self.settings.strict_header)
            parser.parse()
        except (OSError, BMPError) as e:
            logger.warning("Could not open %s: %s", filepath, e)
            QMessageBox.warning(self, "Open BMP File", f"Could not open {os.path.basename(filepath)}:\n{e}")
            return

        self.metadata_box.setText(format_metadata(parser.metadata))

        self.original_pixels = parser.pixel_data
        self.pixels = parser.pixel_data
        # Remember the opened file so Save As can suggest a name
        self.current_filepath = filepath
        self.setWindowTitle(f"BMP Image Processor - {os.path.basename(filepath)}")

        self.update_image()

    def update_image(self):
        if self.pixels is None:
            return
        pixmap = QPixmap.fromImage(pixels_to_qimage(self.pixels))
        # Shrink large images to fit the label
        if pixmap.width() > self.image_label.width() or pixmap.height() > self.image_label.height():
            pixmap = pixmap.scaled(self.image_label.size(), Qt.KeepAspectRatio)
        self.image_label.setPixmap(pixmap)

    def ask_params(self, operation):
        """Prompt for each parameter; returns None if the user cancels."""
        values = {}
        for param in operation.params:
            default = param_default(param, self.settings)
            if param.kind is int:
                minimum = int(param.minimum) if param.minimum is not None else -1000
                value, ok = QInputDialog.getInt(
                    self, operation.label, f"{param.label}:", default if default is not None else minimum, minimum, 1000
                )
            else:
                value, ok = QInputDialog.getDouble(
                    self, operation.label, f"{param.label}:", default or 0.0, 0.0, 100.0, 2
                )
            if not ok:
                return None
            values[param.name] = value
        return values

    def apply_selected(self):
        if self.pixels is None:
            return
        operation = OPERATIONS[self.operation_box.currentIndex()]
        params = self.ask_params(operation)
        if params is None:
            return

        try:
            self.pixels = apply_operation(operation.key, self.pixels, params, self.settings)
        except BMPError as e:
            QMessageBox.warning(self, operation.label, str(e))
            return

        self.metadata_box.append(f"Applied {operation.label.lower()} {params or ''}".rstrip())
        self.update_image()

    def reset_image(self):
        if self.original_pixels is None:
            return
        self.pixels = self.original_pixels
        self.metadata_box.append("Reset to original image")
        self.update_image()

    def save_file(self):
        if self.pixels is None:
            return

        suggested = self.current_filepath or ""
        output_filepath, _ = QFileDialog.getSaveFileName(self, "Save BMP File", suggested, "BMP Files (*.bmp)")
        if not output_filepath:
            return
        output_filepath = ensure_bmp_extension(output_filepath)

        if write_image(output_filepath, self.pixels):
            self.metadata_box.append(f"Saved to {output_filepath}")
        else:
            QMessageBox.warning(self, "Save BMP File", f"Could not write {output_filepath}")


def run():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication(sys.argv)
    viewer = BMPViewer(settings)
    viewer.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    run()
