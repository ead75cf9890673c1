from datetime import datetime, timezone
from typing import List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from ..models import CallbackData, CallbackPayload, CallbackSong, Song

MODEL_NAME = "udio"
SUCCESS_MSG = "Generated successfully."
ALL_FAILED_MSG = "All songs generation failed"

_datetime = TypeAdapter(datetime)


def format_create_time(created_at: Optional[str]) -> str:
    """ISO-8601 timestamp -> 'YYYY-MM-DD HH:MM:SS' in UTC, or '' if unparseable."""
    if not created_at:
        return ""
    try:
        dt = _datetime.validate_python(created_at.strip())
    except ValidationError:
        return ""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def join_tags(tags: Optional[Sequence[str]]) -> str:
    if not tags:
        return ""
    return ",".join(tags)


def to_callback_song(song: Song) -> CallbackSong:
    return CallbackSong(
        id=song.id,
        audio_url=song.song_path or "",
        image_url=song.image_path or "",
        # callers expect the generated lyrics here, not the submitted prompt
        prompt=song.lyrics or "",
        model_name=MODEL_NAME,
        title=song.title or "",
        tags=join_tags(song.tags),
        createTime=format_create_time(song.created_at),
        duration=song.duration or 0,
        status="501" if song.error_code else "200",
        error_message=song.error_detail,
    )


def all_failed(songs: Sequence[Song]) -> bool:
    return bool(songs) and all(s.has_failed for s in songs)


def build_callback_payload(task_id: str, songs: Sequence[Song]) -> CallbackPayload:
    entries: List[CallbackSong] = [to_callback_song(s) for s in songs]
    data = CallbackData(task_id=task_id, data=entries)

    if all_failed(songs):
        # Only the first song's error is reported at batch level; the rest
        # remain visible through each entry's error_message.
        first = songs[0]
        return CallbackPayload(
            code=501,
            msg=first.error_detail or ALL_FAILED_MSG,
            detail=first.error_code or ALL_FAILED_MSG,
            data=data,
        )
    return CallbackPayload(code=200, msg=SUCCESS_MSG, data=data)


def payload_to_dict(payload: CallbackPayload) -> dict:
    exclude = {"detail"} if payload.detail is None else None
    return payload.model_dump(exclude=exclude)
