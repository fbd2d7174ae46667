from video_roulette.data_models import Author, VideoDetails, VideoInfo
from video_roulette.normalize import format_duration, media_url, normalize_video


def test_normalize_video(sample_info):
    resp = normalize_video(sample_info)

    assert resp.code == 200
    assert resp.msg == "success"
    assert resp.data.url == "https://www.tikwm.com/video/media/hdplay/abc.mp4"
    assert resp.data.duration == "30s"
    assert resp.data.region == "US"
    assert resp.data.cover == "https://example.com/cover.jpg"
    assert resp.data.title == "A clip"
    assert resp.data.user.username == "u1"
    assert resp.data.user.nickname == "N"
    assert resp.data.user.userID == "uid1"


def test_normalize_serializes_public_keys(sample_info):
    body = normalize_video(sample_info).model_dump()

    assert set(body) == {"code", "msg", "data"}
    assert set(body["data"]) == {"region", "url", "cover", "title", "duration", "user"}
    assert body["data"]["user"] == {"username": "u1", "nickname": "N", "userID": "uid1"}


def test_zero_duration():
    info = VideoInfo(code=0, data=VideoDetails(id="z", author=Author()))

    assert normalize_video(info).data.duration == "0s"


def test_helpers():
    assert media_url("7234") == "https://www.tikwm.com/video/media/hdplay/7234.mp4"
    assert format_duration(125) == "125s"
