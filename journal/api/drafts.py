"""Drafts and templates API."""

from fastapi import APIRouter, Depends, HTTPException

from journal.api.deps import get_draft_store, get_template_store
from journal.errors import DraftNotFoundError, TemplateNotFoundError
from journal.models.workspace import Draft, TradeTemplate
from journal.services.drafts import DraftStore, TemplateStore

router = APIRouter(prefix="/api", tags=["drafts"])


@router.get("/drafts")
def list_drafts(drafts: DraftStore = Depends(get_draft_store)):
    return [d.model_dump(mode="json", by_alias=True) for d in drafts.get_all()]


@router.post("/drafts", status_code=201)
def save_draft(body: Draft, drafts: DraftStore = Depends(get_draft_store)):
    return drafts.save(body).model_dump(mode="json", by_alias=True)


@router.get("/drafts/{draft_id}")
def get_draft(draft_id: str, drafts: DraftStore = Depends(get_draft_store)):
    try:
        return drafts.get(draft_id).model_dump(mode="json", by_alias=True)
    except DraftNotFoundError:
        raise HTTPException(status_code=404, detail="Draft not found")


@router.delete("/drafts/{draft_id}", status_code=204)
def delete_draft(draft_id: str, drafts: DraftStore = Depends(get_draft_store)):
    try:
        drafts.delete(draft_id)
    except DraftNotFoundError:
        raise HTTPException(status_code=404, detail="Draft not found")


@router.get("/templates")
def list_templates(templates: TemplateStore = Depends(get_template_store)):
    return [t.model_dump(mode="json", by_alias=True) for t in templates.get_all()]


@router.post("/templates", status_code=201)
def save_template(body: TradeTemplate, templates: TemplateStore = Depends(get_template_store)):
    return templates.save(body).model_dump(mode="json", by_alias=True)


@router.delete("/templates/{index}", status_code=204)
def delete_template(index: int, templates: TemplateStore = Depends(get_template_store)):
    try:
        templates.delete(index)
    except TemplateNotFoundError:
        raise HTTPException(status_code=404, detail="Template not found")
