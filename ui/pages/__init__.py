from .compress_page import CompressPage
from ._details_panel import DetailsPanel

__all__ = ["CompressPage", "DetailsPanel"]
