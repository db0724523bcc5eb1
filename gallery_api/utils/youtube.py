"""
YouTube URL helpers for video gallery entries.
"""
import re
from typing import Optional

# Accepts watch?v=, &v=, youtu.be/, embed/, v/ and u/x/ style links
_VIDEO_ID_PATTERN = re.compile(r"^.*(youtu\.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*")

VIDEO_ID_LENGTH = 11
THUMBNAIL_BASE_URL = "https://img.youtube.com/vi"


def extract_video_id(url: Optional[str]) -> Optional[str]:
    """
    Extract the 11 character video id from a YouTube URL.

    Args:
        url: Any YouTube link form (watch, short, embed)

    Returns:
        Optional[str]: Video id, or None if the URL does not carry a valid one
    """
    if not url:
        return None
    match = _VIDEO_ID_PATTERN.match(url.strip())
    if match and len(match.group(2)) == VIDEO_ID_LENGTH:
        return match.group(2)
    return None


def thumbnail_url(video_id: str, quality: str = "maxresdefault") -> str:
    """Build the still-image URL YouTube serves for a video."""
    return f"{THUMBNAIL_BASE_URL}/{video_id}/{quality}.jpg"
