"""Admin API: view, edit, reset and reload the LLM prompt templates."""

import logging

from fastapi import APIRouter, Depends

from candidate_matcher.api.deps import get_prompt_store
from candidate_matcher.core.auth import AdminContext, require_admin
from candidate_matcher.models.schemas import PromptDto, PromptUpdateRequest
from candidate_matcher.services.prompt_store import PromptStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/status")
async def admin_status(admin: AdminContext = Depends(require_admin)):
    return "Admin panel is accessible"


@router.get("/prompts", response_model=list[PromptDto])
async def list_prompts(
    admin: AdminContext = Depends(require_admin),
    store: PromptStore = Depends(get_prompt_store),
):
    """All four prompt templates with their current content."""
    return store.get_all_prompts()


@router.get("/prompts/{prompt_type}/{role}", response_model=PromptDto)
async def get_prompt(
    prompt_type: str,
    role: str,
    admin: AdminContext = Depends(require_admin),
    store: PromptStore = Depends(get_prompt_store),
):
    """One template, e.g. /prompts/summary/system."""
    return store.get_prompt(prompt_type, role)


@router.put("/prompts", response_model=PromptDto)
async def update_prompt(
    body: PromptUpdateRequest,
    admin: AdminContext = Depends(require_admin),
    store: PromptStore = Depends(get_prompt_store),
):
    """Save new template content. Takes effect on the next match request."""
    prompt = store.update_prompt(body.type, body.role, body.content)
    logger.info("Prompt %s/%s updated by %s", body.type.value, body.role.value, admin.user_id)
    return prompt


@router.post("/prompts/refresh")
async def refresh_prompts(
    admin: AdminContext = Depends(require_admin),
    store: PromptStore = Depends(get_prompt_store),
):
    """Reload every template from disk."""
    store.refresh()
    return "Prompts refreshed successfully"


@router.post("/prompts/{prompt_type}/{role}/reset", response_model=PromptDto)
async def reset_prompt(
    prompt_type: str,
    role: str,
    admin: AdminContext = Depends(require_admin),
    store: PromptStore = Depends(get_prompt_store),
):
    """Discard any admin edit and restore the shipped default template."""
    prompt = store.reset_prompt(prompt_type, role)
    logger.info("Prompt %s/%s reset by %s", prompt.type.value, prompt.role.value, admin.user_id)
    return prompt
