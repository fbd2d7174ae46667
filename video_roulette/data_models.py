from typing import Any, List, Optional
from pydantic import BaseModel, Field, model_validator


class NewURLRequest(BaseModel):
    url: str = Field(..., min_length=1)


class StoredURL(BaseModel):
    id: str
    url: str


class ImportResponse(BaseModel):
    imported: int
    urls: List[StoredURL]


# Shape of the tikwm.com /api response. Missing or null fields fall back to
# empty values, wrong types fail validation.

class TikwmModel(BaseModel):
    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class MusicInfo(TikwmModel):
    id: str = ""
    title: str = ""
    play: str = ""
    cover: str = ""


class Author(TikwmModel):
    id: str = ""
    unique_id: str = ""
    nickname: str = ""
    avatar: str = ""


class VideoDetails(TikwmModel):
    id: str = ""
    region: str = ""
    title: str = ""
    cover: str = ""
    ai_dynamic_cover: str = ""
    origin_cover: str = ""
    duration: int = 0
    play: str = ""
    wmplay: str = ""
    size: int = 0
    wm_size: int = 0
    music_info: MusicInfo = Field(default_factory=MusicInfo)
    play_count: int = 0
    digg_count: int = 0
    comment_count: int = 0
    share_count: int = 0
    download_count: int = 0
    collect_count: int = 0
    create_time: int = 0
    author: Author = Field(default_factory=Author)


class VideoInfo(TikwmModel):
    code: int = 0
    msg: str = ""
    data: Optional[VideoDetails] = None


# Public response of GET /get

class VideoUser(BaseModel):
    username: str
    nickname: str
    userID: str


class VideoData(BaseModel):
    region: str
    url: str
    cover: str
    title: str
    duration: str
    user: VideoUser


class VideoDataResponse(BaseModel):
    code: int = 200
    msg: str = "success"
    data: VideoData
