from bragsheet.schemas.portfolio import DocumentStyle
from bragsheet.services.renderers.application import ApplicationRenderer
from bragsheet.services.renderers.base import RenderContext, StyleRenderer
from bragsheet.services.renderers.plain import PlainRenderer
from bragsheet.services.renderers.professional import ProfessionalRenderer

RENDERERS: dict[DocumentStyle, type[StyleRenderer]] = {
    DocumentStyle.PLAIN: PlainRenderer,
    DocumentStyle.PROFESSIONAL: ProfessionalRenderer,
    DocumentStyle.APPLICATION: ApplicationRenderer,
}

__all__ = [
    "RENDERERS",
    "RenderContext",
    "StyleRenderer",
    "PlainRenderer",
    "ProfessionalRenderer",
    "ApplicationRenderer",
]
