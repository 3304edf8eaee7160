from .format_picker import FormatPicker

__all__ = ["FormatPicker"]
