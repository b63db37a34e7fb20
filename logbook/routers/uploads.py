# logbook/routers/uploads.py
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from logbook.auth.dependencies import get_current_user
from logbook.models.users import User
from logbook.services.storage import delete_image, path_from_url, upload_image

router = APIRouter(prefix="/uploads", tags=["画像"])


@router.post("/images", status_code=status.HTTP_201_CREATED)
async def post_image(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
):
    """업로드 후 public URL 반환 → entry / memo 의 imageUrl 로 사용"""
    data = await file.read()
    url = await run_in_threadpool(
        upload_image,
        current_user.uid,
        file.filename or "image",
        data,
        file.content_type,
    )
    return {"url": url}


@router.delete("/images")
def remove_image(
    url: str = Query(...),
    current_user: User = Depends(get_current_user),
):
    # 다른 유저 경로의 파일은 지울 수 없음
    path = path_from_url(url)
    if not path or not path.startswith(f"entries/{current_user.uid}/"):
        raise HTTPException(status_code=403, detail="Forbidden")
    return {"deleted": delete_image(url)}
