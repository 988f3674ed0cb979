"""
Editing controllers.

render_editor dispatches a block to the editor registered for its type.
BlockEditor hosts a whole document; BlockTypeSelector offers the block types
that can still be added.
"""

from .base import BlockEditorBase, EditorMeta, UnknownBlockTypeEditor, render_editor
from .text import TextEditor
from .checklist import ChecklistEditor, ChecklistStats, checklist_stats, toggle_checklist_item
from .image import ImageEditor, ImageFile, ImageProcessingError, UploadResult, process_file_to_image
from .image_validation import FileValidationError, FileValidationResult, validate_image_file
from .mood import MoodEditor, coerce_intensity, get_emotion_color, get_intensity_color, get_intensity_label, split_emotion
from .divider import DividerEditor, DIVIDER_STYLES
from .debounce import Debouncer
from .selector import BlockTypeSelector
from .surface import BlockEditor, DragEvent

__all__ = [
    "BlockEditorBase",
    "EditorMeta",
    "UnknownBlockTypeEditor",
    "render_editor",
    "TextEditor",
    "ChecklistEditor",
    "ChecklistStats",
    "checklist_stats",
    "toggle_checklist_item",
    "ImageEditor",
    "ImageFile",
    "ImageProcessingError",
    "UploadResult",
    "process_file_to_image",
    "FileValidationError",
    "FileValidationResult",
    "validate_image_file",
    "MoodEditor",
    "coerce_intensity",
    "get_emotion_color",
    "get_intensity_color",
    "get_intensity_label",
    "split_emotion",
    "DividerEditor",
    "DIVIDER_STYLES",
    "Debouncer",
    "BlockTypeSelector",
    "BlockEditor",
    "DragEvent",
]
