from .boxes import parse_markup
from .paginator import compute_bands, paginate
from .surface import MarkupSurface, RenderSurface, no_print_hidden

__all__ = ["MarkupSurface", "RenderSurface", "compute_bands", "no_print_hidden", "paginate", "parse_markup"]
