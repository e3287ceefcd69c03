"""
Document assembler — runs one brag sheet export end to end.

Pipeline for a single run:
1. Pick the style's config and renderer
2. Create a fresh PdfSurface + LayoutEngine (a run never shares layout
   state with another run)
3. Let the renderer stream its blocks into the engine; images are
   resolved along the way, one at a time
4. finish() the engine (last footer), serialize the canvas to PDF bytes
5. Derive the filename from the student's name and the style

generate() is the only error boundary. Per-image and per-field problems
are absorbed inside the renderer and resolver; anything else aborts the
run and surfaces as a single DocumentGenerationError. Partial output is
discarded and never returned.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from bragsheet.config import Settings, settings as default_settings
from bragsheet.schemas.portfolio import DocumentStyle, ProfileSummary
from bragsheet.services.content_model import ContentModel
from bragsheet.services.image_resolver import ImageResolver
from bragsheet.services.layout_engine import LayoutEngine, PdfSurface
from bragsheet.services.renderers import RENDERERS, RenderContext
from bragsheet.services.styles import STYLE_CONFIGS, StyleConfig
from bragsheet.services.text_metrics import TextMeasurer

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


class DocumentGenerationError(Exception):
    """A brag sheet export failed. No document was produced."""

    def __init__(self, style: DocumentStyle, message: str):
        self.style = style
        super().__init__(message)


@dataclass
class GeneratedDocument:
    content: bytes
    filename: str
    page_count: int
    media_type: str = "application/pdf"


def build_filename(profile: Optional[ProfileSummary], style: DocumentStyle,
                   label: Optional[str] = None) -> str:
    """'Jane_Doe_Brag_Sheet_Professional.pdf' or 'Brag_Sheet.pdf' without a name.

    Whitespace runs in the name collapse to a single underscore.
    """
    label = label or default_settings.DOCUMENT_LABEL
    suffix = STYLE_CONFIGS[style].filename_suffix
    name = (profile.full_name or "").strip() if profile else ""
    if name:
        return f"{_WHITESPACE.sub('_', name)}_{label}{suffix}.pdf"
    return f"{label}{suffix}.pdf"


class DocumentAssembler:
    """Drives a style renderer and packages the result.

    Usage:
        assembler = DocumentAssembler()
        document = await assembler.generate(model, DocumentStyle.PROFESSIONAL)
        document.content   # PDF bytes
        document.filename  # "Jane_Doe_Brag_Sheet_Professional.pdf"

    resolver_factory builds the ImageResolver for a run; tests pass one
    wired to httpx.MockTransport.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        resolver_factory: Optional[Callable[[], ImageResolver]] = None,
        generated_on: Optional[date] = None,
    ):
        self.settings = settings or default_settings
        self.resolver_factory = resolver_factory or ImageResolver
        self.generated_on = generated_on
        # Exposed for inspection after a run
        self.last_engine: Optional[LayoutEngine] = None

    async def generate(self, model: ContentModel, style: DocumentStyle) -> GeneratedDocument:
        """Render the model in the given style. Raises DocumentGenerationError."""
        style = DocumentStyle(style)
        config = STYLE_CONFIGS[style]
        logger.info("Generating %s brag sheet (%d entries)", style.value, len(model.entries))

        try:
            async with self.resolver_factory() as resolver:
                engine = await self._render(model, config, resolver)
                page_count = engine.finish()
                content = engine.surface.serialize()
        except Exception as e:
            logger.exception("Brag sheet generation failed (%s)", style.value)
            raise DocumentGenerationError(
                style, f"Could not generate the {config.label} brag sheet: {e}",
            ) from e

        self.last_engine = engine
        filename = build_filename(model.profile, style, self.settings.DOCUMENT_LABEL)
        logger.info("Generated %s: %d page(s), %d bytes", filename, page_count, len(content))

        return GeneratedDocument(content=content, filename=filename, page_count=page_count)

    async def _render(self, model: ContentModel, config: StyleConfig,
                      resolver: ImageResolver) -> LayoutEngine:
        measurer = TextMeasurer()
        profile = model.profile

        surface = PdfSurface(
            config.geometry,
            measurer,
            title=f"Brag Sheet - {profile.full_name or 'Student'}",
            author=self.settings.DOCUMENT_AUTHOR,
            footer_text=config.footer_text,
            footer_font=config.footer_font,
            footer_color=config.palette.muted,
            running_header=(profile.full_name or config.label) if config.running_header else None,
        )
        engine = LayoutEngine(config.geometry, surface, measurer)

        context = RenderContext(
            engine=engine,
            measurer=measurer,
            resolver=resolver,
            settings=self.settings,
            generated_on=self.generated_on,
        )
        renderer = RENDERERS[config.style](context, config)
        await renderer.render(model)
        return engine
