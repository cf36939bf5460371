"""
Imports the browser's `videoData` localStorage export into the database.

Usage:
    python scripts/import_local_storage.py videoData.json

In the browser console: copy(localStorage.getItem("videoData"))
"""
import sys
import os
import json
import uuid
from datetime import timezone

# Ensure project root is in path
sys.path.append(os.getcwd())

from pydantic import ValidationError

from jiazheng_assistant.core.database import Base, SessionLocal, engine
from jiazheng_assistant.models.video_record import VideoRecord
from jiazheng_assistant.schemas.video import VideoCreate, VideoData
from jiazheng_assistant.services.video_service import next_seq


def load_records(path):
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)

    # Some exports wrap the array as {"videoData": [...]}
    if isinstance(raw, dict):
        raw = raw.get("videoData", [])
    if not isinstance(raw, list):
        raise ValueError("expected a JSON array of video records")
    return raw


def import_records(db, records):
    """Returns (imported, skipped). Existing ids are left untouched."""
    imported = skipped = 0
    seen = set()
    seq = next_seq(db)

    for item in records:
        if not isinstance(item, dict):
            skipped += 1
            continue

        try:
            video = VideoData.model_validate(item)
        except ValidationError as e:
            print(f"⚠️ Skipping malformed record: {e}")
            skipped += 1
            continue

        record_id = (video.id or uuid.uuid4().hex)[:32]
        if record_id in seen or db.query(VideoRecord).filter(VideoRecord.id == record_id).first():
            skipped += 1
            continue

        fields = VideoCreate.model_validate(video.model_dump()).model_dump(mode="json")
        row = VideoRecord(id=record_id, seq=seq, **fields)
        if video.created_at:
            created_at = video.created_at
            if created_at.tzinfo is not None:
                # Stored as naive UTC, like datetime.utcnow()
                created_at = created_at.astimezone(timezone.utc).replace(tzinfo=None)
            row.created_at = created_at
        db.add(row)
        seen.add(record_id)
        seq += 1
        imported += 1

    return imported, skipped


def run(path):
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    print("🚀 Starting import...")

    try:
        records = load_records(path)
        print(f"📊 Processing {len(records)} records from {path}...")

        imported, skipped = import_records(db, records)
        db.commit()
        print(f"🎉 Success! Imported {imported}, skipped {skipped}.")

    except Exception as e:
        db.rollback()
        print(f"❌ Error: {e}")
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)
    run(sys.argv[1])
