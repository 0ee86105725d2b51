from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from linktrackr.click_processor.recorder import ClickRecorder
from linktrackr.dependencies import get_click_recorder, get_redirect_service
from linktrackr.exceptions import store_errors
from linktrackr.schemas.click import ClickEvent
from linktrackr.services.redirect_service import RedirectService

router = APIRouter(tags=["redirect"])


@router.get("/{short_id}")
async def redirect_to_original_url(
    short_id: str,
    request: Request,
    background_tasks: BackgroundTasks,
    redirect_service: RedirectService = Depends(get_redirect_service),
    click_recorder: ClickRecorder = Depends(get_click_recorder)
):
    """
    Redirect to the original URL.

    Flow:
    1. Resolve the short id (cache first, store on miss)
    2. Schedule the click write as a background task
    3. Redirect with 301; the click is written after the response is sent
    """
    with store_errors("Server error during redirect"):
        resolution = await redirect_service.resolve(short_id)

    if resolution is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )

    if resolution.link_id is not None:
        background_tasks.add_task(
            click_recorder.record,
            resolution.link_id,
            ClickEvent.from_request(request),
        )

    return RedirectResponse(url=resolution.original_url, status_code=status.HTTP_301_MOVED_PERMANENTLY)
