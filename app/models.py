from pydantic import BaseModel, Field
from typing import List, Literal, Optional, Union

class TaskRequest(BaseModel):
    taskId: str
    trackIds: List[str] = Field(min_length=1)
    callbackUrl: str

class Song(BaseModel):
    id: str
    song_path: Optional[str] = None
    error_code: Optional[str] = None
    error_detail: Optional[str] = None
    image_path: Optional[str] = None
    lyrics: Optional[str] = None
    title: Optional[str] = ""
    tags: Optional[List[str]] = None
    created_at: Optional[str] = None
    duration: Optional[Union[int, float]] = None
    finished: Optional[bool] = None
    prompt: Optional[str] = None

    @property
    def is_finished(self) -> bool:
        return bool(self.song_path) or bool(self.error_code)

    @property
    def has_failed(self) -> bool:
        return self.error_code is not None

class SongsResponse(BaseModel):
    songs: List[Song] = []

class CallbackSong(BaseModel):
    id: str
    audio_url: str
    image_url: str
    prompt: str
    model_name: str = "udio"
    title: str
    tags: str
    createTime: str
    duration: Union[int, float]
    status: str  # "200" | "501"
    error_message: Optional[str] = None

class CallbackData(BaseModel):
    callbackType: Literal["complete"] = "complete"
    task_id: str
    data: List[CallbackSong]

class CallbackPayload(BaseModel):
    code: int  # 200 | 501
    msg: str
    detail: Optional[str] = None  # set only when code == 501
    data: CallbackData

class TaskStatusResponse(BaseModel):
    status: str  # success | timeout
    message: str
    callbackSuccess: Optional[bool] = None

class ErrorResponse(BaseModel):
    error: str
