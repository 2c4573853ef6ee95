"""Pairing lab endpoints."""

from fastapi import APIRouter, Depends, Response

from culinary_studio.api.dependencies import get_container, require_session
from culinary_studio.api.schemas import AnalyzeRequest, SavePairingRequest, SpeakRequest
from culinary_studio.containers import AppContainer
from culinary_studio.domain.audio import SPEECH_SAMPLE_RATE
from culinary_studio.services.sessions import StudioSession

router = APIRouter(prefix="/pairings", tags=["pairings"])

PCM_MEDIA_TYPE = f"audio/L16; rate={SPEECH_SAMPLE_RATE}; channels=1"


@router.post("/analyze")
async def analyze(
    body: AnalyzeRequest,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Analyze an ingredient pairing in the session language by default."""
    analysis = await container.pairing_service.analyze(
        body.ingredients, body.language or session.language, body.deep
    )
    return {"analysis": analysis.model_dump(by_alias=True, exclude_none=True)}


@router.post("/speak")
async def speak(
    body: SpeakRequest,
    _: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> Response:
    """Return the explanation as raw PCM, or 204 when speech failed."""
    audio = await container.pairing_service.speak(body.analysis)
    if audio is None:
        return Response(status_code=204)
    return Response(content=audio.pcm, media_type=PCM_MEDIA_TYPE)


@router.get("")
async def list_pairings(
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return {"pairings": container.pairing_service.list_pairings(session.user_id)}


@router.post("")
async def save_pairing(
    body: SavePairingRequest,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    pairing = container.pairing_service.save(
        session.user_id, body.ingredients, body.analysis, body.name
    )
    return {"pairing": pairing}


@router.get("/{pairing_id}")
async def get_pairing(
    pairing_id: str,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return {
        "pairing": container.pairing_service.get_pairing(session.user_id, pairing_id)
    }


@router.delete("/{pairing_id}")
async def delete_pairing(
    pairing_id: str,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    container.pairing_service.delete(session.user_id, pairing_id)
    return {"status": "ok"}
