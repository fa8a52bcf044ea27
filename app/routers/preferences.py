"""
Preferences Endpoint Module.

Stores the theme and UI language chosen by a client, so the presentation
layer can be configured at start-up instead of keeping global page state.
"""

from fastapi import APIRouter, Depends

from app.dependencies import get_preference_store
from app.models.preference_models import Preferences, PreferencesUpdate
from app.services.preferences import PreferenceStore

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("/{client_id}", summary="Get display preferences", response_model=Preferences)
async def get_preferences(client_id: str, store: PreferenceStore = Depends(get_preference_store)):
    return await store.get(client_id)


@router.put("/{client_id}", summary="Update display preferences", response_model=Preferences)
async def update_preferences(
    client_id: str,
    changes: PreferencesUpdate,
    store: PreferenceStore = Depends(get_preference_store),
):
    """Only the fields present in the body are changed."""
    return await store.update(client_id, changes)
