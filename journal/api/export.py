"""Export API — CSV and JSON downloads of the journal."""

from datetime import date

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from journal.api.deps import get_draft_store, get_profile_service, get_repository, get_template_store
from journal.services.drafts import DraftStore, TemplateStore
from journal.services.export import to_csv, to_json
from journal.services.profile import ProfileService
from journal.services.repository import TradeRepository

router = APIRouter(prefix="/api/export", tags=["export"])


def _attachment(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


@router.get("/csv")
def export_csv(repo: TradeRepository = Depends(get_repository)):
    filename = f"trading-journal-{date.today().isoformat()}.csv"
    return Response(
        content=to_csv(repo.get_all()),
        media_type="text/csv; charset=utf-8",
        headers=_attachment(filename),
    )


@router.get("/json")
def export_json(
    repo: TradeRepository = Depends(get_repository),
    profile: ProfileService = Depends(get_profile_service),
    drafts: DraftStore = Depends(get_draft_store),
    templates: TemplateStore = Depends(get_template_store),
):
    content = to_json(
        trades=repo.get_all(),
        user=profile.get_user(),
        settings=profile.get_settings(),
        drafts=drafts.get_all(),
        templates=templates.get_all(),
    )
    filename = f"trading-journal-{date.today().isoformat()}.json"
    return Response(content=content, media_type="application/json", headers=_attachment(filename))
