from .bending import CYCLE, QUAD_ANCHORS, Bending, get_bending
from .colors import (
    COLOR_FILTER_OPTIONS,
    COLOR_MAP,
    COLOR_SHIFTS,
    Axis,
    Color,
    ColorInfo,
    color_from_label,
    color_info,
    get_color_info,
    get_polarity_axis,
    is_colorless,
    is_transparent,
)
from .waves import (
    DIMENSION_OFFSETS,
    SPLIT_TOTAL,
    WAVES,
    Dimension,
    Split,
    SplitPair,
    WaveBreakdown,
    dimension_preview,
    get_split,
    orthogonal_direction,
    orthogonal_name,
    wave_breakdown,
    wave_curve,
    wave_left,
)

__all__ = [
    "COLOR_FILTER_OPTIONS",
    "COLOR_MAP",
    "COLOR_SHIFTS",
    "CYCLE",
    "DIMENSION_OFFSETS",
    "QUAD_ANCHORS",
    "SPLIT_TOTAL",
    "WAVES",
    "Axis",
    "Bending",
    "Color",
    "ColorInfo",
    "Dimension",
    "Split",
    "SplitPair",
    "WaveBreakdown",
    "color_from_label",
    "color_info",
    "dimension_preview",
    "get_bending",
    "get_color_info",
    "get_polarity_axis",
    "get_split",
    "is_colorless",
    "is_transparent",
    "orthogonal_direction",
    "orthogonal_name",
    "wave_breakdown",
    "wave_curve",
    "wave_left",
]
