from .image_editor import (
    EditorConfig,
    ImageEditor,
)
from .logging_config import setup_logging
