from typing import Any
from urllib.parse import quote

from fastapi import APIRouter, Body
from fastapi.responses import HTMLResponse, Response

from slideai.controllers import deck_controller
from slideai.schemas.generation import GenerateDeckRequest, GenerateDeckResponse
from slideai.schemas.rendered import RenderedDeck

router = APIRouter(prefix="/decks", tags=["decks"])

PPTX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"

PayloadBody = Body(..., description="PresentationPayload JSON (camelCase keys)")


def _pptx_response(deck: RenderedDeck) -> Response:
    filename = deck_controller.download_name(deck.title, "pptx")
    return Response(
        content=deck_controller.export_pptx(deck),
        media_type=PPTX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )


@router.post("/layout", response_model=RenderedDeck)
async def layout_deck(payload: dict[str, Any] = PayloadBody):
    """Lay out a payload and return every slide's positioned elements."""
    return deck_controller.layout_deck(payload)


@router.post("/pptx", response_class=Response)
async def export_pptx(payload: dict[str, Any] = PayloadBody):
    """Lay out a payload and download it as a PowerPoint file."""
    return _pptx_response(deck_controller.layout_deck(payload))


@router.post("/html", response_class=HTMLResponse)
async def export_html(payload: dict[str, Any] = PayloadBody):
    """Lay out a payload and return a self-contained HTML deck."""
    return HTMLResponse(deck_controller.export_html(deck_controller.layout_deck(payload)))


@router.post("/generate", response_model=None)
async def generate_deck(request: GenerateDeckRequest) -> GenerateDeckResponse | Response:
    """Generate slide content from a conversation, then render it in the requested format."""
    payload = await deck_controller.generate_payload(request.history)

    if request.format == "payload":
        return GenerateDeckResponse(
            payload=payload, message="Rendering not requested; returning slide content only"
        )

    deck = deck_controller.layout_deck(payload)
    if request.format == "pptx":
        return _pptx_response(deck)
    if request.format == "html":
        return HTMLResponse(deck_controller.export_html(deck))
    return GenerateDeckResponse(payload=payload, deck=deck)
