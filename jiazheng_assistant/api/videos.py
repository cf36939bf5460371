from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from jiazheng_assistant.core.database import get_db
from jiazheng_assistant.services.video_service import VideoService
from jiazheng_assistant.schemas.video import VideoCreate, VideoResponse

router = APIRouter(prefix="/api/videos", tags=["Video Records"])

# --- READ ALL ---
@router.get("", response_model=List[VideoResponse])
def list_videos(db: Session = Depends(get_db)):
    service = VideoService(db)
    return service.list_videos()

# --- READ ONE ---
@router.get("/{video_id}", response_model=VideoResponse)
def get_video(video_id: str, db: Session = Depends(get_db)):
    service = VideoService(db)
    video = service.get_video(video_id)
    if not video:
        raise HTTPException(status_code=404, detail="Video not found")
    return video

# --- CREATE ---
@router.post("", response_model=VideoResponse)
def create_video(payload: VideoCreate, db: Session = Depends(get_db)):
    service = VideoService(db)
    return service.create_video(payload)

# --- UPDATE (full replacement) ---
@router.put("/{video_id}", response_model=VideoResponse)
def update_video(video_id: str, payload: VideoCreate, db: Session = Depends(get_db)):
    service = VideoService(db)
    updated = service.update_video(video_id, payload)
    if not updated:
        raise HTTPException(status_code=404, detail="Video not found")
    return updated

# --- DELETE ---
@router.delete("/{video_id}")
def delete_video(video_id: str, db: Session = Depends(get_db)):
    service = VideoService(db)
    success = service.delete_video(video_id)
    if not success:
        raise HTTPException(status_code=404, detail="Video not found")
    return {"message": "Video deleted successfully"}
