"""
Test fixtures shared across all tests.

Architecture:
- No database: the export service is a pure in-process transform, so the
  fixtures build input records in memory (see factories.py).
- The HTTP test client uses the real FastAPI app through ASGITransport.
- Network access is never used. Image fetches go through
  httpx.MockTransport, wired in via the assembler dependency override.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from bragsheet.main import app
from bragsheet.routers import exports
from bragsheet.services.document_assembler import DocumentAssembler

from factories import FIXED_DATE, mock_resolver, png_bytes


IMAGE_URLS = {
    "https://img.example.com/a.png": png_bytes(color="red"),
    "https://img.example.com/b.png": png_bytes(color="green"),
    "https://img.example.com/c.png": png_bytes(color="blue"),
}


@pytest.fixture
def images():
    """URL -> PNG bytes served by the mock transport."""
    return dict(IMAGE_URLS)


@pytest.fixture
def assembler(images):
    """Assembler whose image fetches hit the mock transport only."""
    return DocumentAssembler(
        resolver_factory=lambda: mock_resolver(images),
        generated_on=FIXED_DATE,
    )


@pytest_asyncio.fixture
async def client(assembler):
    """Async HTTP test client with the mock-backed assembler injected."""
    app.dependency_overrides[exports.get_assembler] = lambda: assembler
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    exports._exports_in_flight.clear()
