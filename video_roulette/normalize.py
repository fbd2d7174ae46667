from .data_models import VideoDataResponse, VideoData, VideoInfo, VideoUser

MEDIA_BASE_URL = "https://www.tikwm.com/video/media/hdplay/"
MEDIA_EXTENSION = ".mp4"


def media_url(video_id: str) -> str:
    return f"{MEDIA_BASE_URL}{video_id}{MEDIA_EXTENSION}"


def format_duration(seconds: int) -> str:
    return f"{seconds}s"


def normalize_video(info: VideoInfo) -> VideoDataResponse:
    """Flatten a tikwm response into the public /get payload."""
    details = info.data
    author = details.author

    return VideoDataResponse(
        data=VideoData(
            region=details.region,
            url=media_url(details.id),
            cover=details.cover,
            title=details.title,
            duration=format_duration(details.duration),
            user=VideoUser(
                username=author.unique_id,
                nickname=author.nickname,
                userID=author.id,
            ),
        )
    )
