"""
Visual configuration for the three brag sheet styles.

Each style is a StyleConfig: page geometry, fonts, palette, footer and
filename policy. The renderers and the PDF surface read these values;
none of them hard-code a font or color of their own. Adding a fourth
style starts with a new config here.
"""

from dataclasses import dataclass, field

from reportlab.lib import colors
from reportlab.lib.colors import Color
from reportlab.lib.pagesizes import letter
from reportlab.lib.units import inch

from bragsheet.schemas.portfolio import DocumentStyle
from bragsheet.services.layout_engine import PageGeometry
from bragsheet.services.text_metrics import FontSpec


# --- Brand Colors ---
# Consistent palette across all styles. Easy to swap for white-labeling.
BRAND_PRIMARY = colors.HexColor("#1a365d")     # Deep navy: headings, bars
BRAND_SECONDARY = colors.HexColor("#2b6cb0")   # Medium blue: subheadings
BRAND_ACCENT = colors.HexColor("#38a169")      # Green: verified marks
BRAND_LIGHT_BG = colors.HexColor("#f7fafc")    # Light gray: cards
BRAND_BORDER = colors.HexColor("#e2e8f0")      # Card borders, grid lines
BRAND_TEXT = colors.HexColor("#2d3748")        # Dark gray: body text
BRAND_MUTED = colors.HexColor("#718096")       # Medium gray: captions


@dataclass(frozen=True)
class Palette:
    primary: Color = colors.black
    secondary: Color = colors.black
    accent: Color = colors.black
    text: Color = colors.black
    muted: Color = colors.HexColor("#646464")
    light_bg: Color = colors.white
    border: Color = colors.HexColor("#c8c8c8")


@dataclass(frozen=True)
class FontSet:
    title: FontSpec
    heading: FontSpec
    subheading: FontSpec
    body: FontSpec
    bold: FontSpec
    italic: FontSpec
    small: FontSpec


@dataclass(frozen=True)
class StyleConfig:
    """Everything that differs visually between styles."""
    style: DocumentStyle
    label: str
    description: str
    geometry: PageGeometry
    fonts: FontSet
    palette: Palette = field(default_factory=Palette)
    footer_text: str = ""
    footer_font: FontSpec = FontSpec("Helvetica", 8)
    filename_suffix: str = ""
    running_header: bool = False
    # Verified entries get either a text suffix or a drawn check mark
    verified_mark: str = ""
    check_mark: bool = False


_LETTER_WIDTH, _LETTER_HEIGHT = letter


PLAIN = StyleConfig(
    style=DocumentStyle.PLAIN,
    label="Plain",
    description="Monospaced text layout with every entry in full.",
    geometry=PageGeometry(
        width=_LETTER_WIDTH,
        height=_LETTER_HEIGHT,
        top_margin=0.75 * inch,
        bottom_margin=0.75 * inch,
        left_margin=0.75 * inch,
        right_margin=0.75 * inch,
        block_spacing=4,
    ),
    fonts=FontSet(
        title=FontSpec("Courier-Bold", 18, 22),
        heading=FontSpec("Courier-Bold", 12, 15),
        subheading=FontSpec("Courier-Bold", 10, 13),
        body=FontSpec("Courier", 9.5, 12),
        bold=FontSpec("Courier-Bold", 9.5, 12),
        italic=FontSpec("Courier-Oblique", 9.5, 12),
        small=FontSpec("Courier", 8.5, 11),
    ),
    footer_text="Brag Sheet",
    footer_font=FontSpec("Courier", 8),
    verified_mark=" [verified]",
)


PROFESSIONAL = StyleConfig(
    style=DocumentStyle.PROFESSIONAL,
    label="Professional",
    description="Colored section bars, stat strip, activity cards and photos.",
    geometry=PageGeometry(
        width=_LETTER_WIDTH,
        height=_LETTER_HEIGHT,
        top_margin=0.75 * inch,
        bottom_margin=0.75 * inch,
        left_margin=0.75 * inch,
        right_margin=0.75 * inch,
        block_spacing=8,
    ),
    fonts=FontSet(
        title=FontSpec("Helvetica-Bold", 22, 26),
        heading=FontSpec("Helvetica-Bold", 12, 15),
        subheading=FontSpec("Helvetica-Bold", 11, 14),
        body=FontSpec("Helvetica", 9.5, 13),
        bold=FontSpec("Helvetica-Bold", 9.5, 13),
        italic=FontSpec("Helvetica-Oblique", 9.5, 13),
        small=FontSpec("Helvetica", 8.5, 11),
    ),
    palette=Palette(
        primary=BRAND_PRIMARY,
        secondary=BRAND_SECONDARY,
        accent=BRAND_ACCENT,
        text=BRAND_TEXT,
        muted=BRAND_MUTED,
        light_bg=BRAND_LIGHT_BG,
        border=BRAND_BORDER,
    ),
    footer_text="Student Brag Sheet",
    filename_suffix="_Professional",
    check_mark=True,
)


APPLICATION = StyleConfig(
    style=DocumentStyle.APPLICATION,
    label="Application Format",
    description="Numbered sections and length limits of a standardized form.",
    geometry=PageGeometry(
        width=_LETTER_WIDTH,
        height=_LETTER_HEIGHT,
        top_margin=1.0 * inch,
        bottom_margin=0.8 * inch,
        left_margin=1.0 * inch,
        right_margin=1.0 * inch,
        block_spacing=6,
    ),
    fonts=FontSet(
        title=FontSpec("Times-Bold", 16, 20),
        heading=FontSpec("Times-Bold", 12, 15),
        subheading=FontSpec("Times-Bold", 10.5, 13),
        body=FontSpec("Times-Roman", 10, 12.5),
        bold=FontSpec("Times-Bold", 10, 12.5),
        italic=FontSpec("Times-Italic", 10, 12.5),
        small=FontSpec("Times-Roman", 8.5, 11),
    ),
    palette=Palette(
        primary=colors.black,
        secondary=colors.HexColor("#333333"),
        accent=colors.black,
        text=colors.black,
        muted=colors.HexColor("#555555"),
        light_bg=colors.HexColor("#f2f2f2"),
        border=colors.HexColor("#999999"),
    ),
    footer_text="Activities & Honors Summary",
    footer_font=FontSpec("Times-Roman", 8),
    filename_suffix="_Application",
    running_header=True,
    verified_mark=" (verified)",
)


STYLE_CONFIGS = {
    DocumentStyle.PLAIN: PLAIN,
    DocumentStyle.PROFESSIONAL: PROFESSIONAL,
    DocumentStyle.APPLICATION: APPLICATION,
}
