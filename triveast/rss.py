# triveast/rss.py
# Purpose: RSS 2.0 feed of Triveast news posts, plus storage for uploaded post images.
# Pitfalls: Posts live in memory only; the two seeded posts come back on restart.
#           Image files persist in the uploads directory across restarts.

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

from triveast.utils import new_id, rfc822

CHANNEL_TITLE = "Triveast News"
CHANNEL_LINK = "https://triveast.com/news"
CHANNEL_DESCRIPTION = "Latest updates and news from Triveast"

IMAGE_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
}
MAX_IMAGE_BYTES = 5 * 1024 * 1024


class ImageTooLarge(ValueError):
    pass


@dataclass(frozen=True)
class StoredImage:
    url: str
    content_type: str
    path: Path


@dataclass(frozen=True)
class RssPost:
    title: str
    description: str
    link: str
    pub_date: datetime
    image_url: str | None = None
    image_type: str | None = None


SEED_POSTS = (
    RssPost(
        title="Welcome to Triveast 💥",
        description="This is our very first news post on Triveast.",
        link="https://triveast.com/news/welcome",
        pub_date=datetime(2025, 9, 18, 14, 0, tzinfo=UTC),
    ),
    RssPost(
        title="Trivia Game Updated 🕹️",
        description="We’ve added donation buttons, score tracking, and an RSS feed!",
        link="https://triveast.com/news/trivia-update",
        pub_date=datetime(2025, 9, 18, 14, 15, tzinfo=UTC),
    ),
)


def image_type_for(name: str) -> str | None:
    """MIME type for an allowed image file name or URL, else None."""
    suffix = PurePosixPath(urlparse(name).path).suffix.lower()
    return IMAGE_TYPES.get(suffix)


class ImageStore:
    """
    Saves uploaded post images under `directory`, served at `url_prefix`.

    Both the declared content type and the file extension must be JPEG, PNG or GIF.
    Files get a random name; only the extension of the client's name is kept.
    """

    def __init__(
        self, directory: str | Path, url_prefix: str = "/uploads", max_bytes: int = MAX_IMAGE_BYTES
    ):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self.url_prefix = url_prefix.rstrip("/")
        self.max_bytes = max_bytes

    def save(self, filename: str, content_type: str | None, data: bytes) -> StoredImage:
        if len(data) > self.max_bytes:
            raise ImageTooLarge(f"Image exceeds {self.max_bytes} bytes")
        mime = image_type_for(filename)
        if mime is None or (content_type or "").lower() not in IMAGE_TYPES.values():
            raise ValueError("Only JPEG, PNG and GIF images are allowed")

        name = f"{new_id()}{PurePosixPath(filename).suffix.lower()}"
        path = self.directory / name
        path.write_bytes(data)
        return StoredImage(url=f"{self.url_prefix}/{name}", content_type=mime, path=path)

    def discard(self, image: StoredImage) -> None:
        image.path.unlink(missing_ok=True)


class RssFeed:
    def __init__(self, seed: tuple[RssPost, ...] = SEED_POSTS):
        self._posts: list[RssPost] = list(seed)

    @property
    def posts(self) -> list[RssPost]:
        return list(self._posts)

    def add_post(
        self,
        title: str,
        description: str,
        link: str | None = None,
        image: StoredImage | None = None,
        *,
        now: datetime | None = None,
    ) -> RssPost:
        title, description = title.strip(), description.strip()
        if not title or not description:
            raise ValueError("Missing required fields")
        post = RssPost(
            title=title,
            description=description,
            link=(link or "").strip() or CHANNEL_LINK,
            pub_date=now or datetime.now(UTC),
            image_url=image.url if image else None,
            image_type=image.content_type if image else None,
        )
        self._posts.append(post)
        return post

    def render(self, *, now: datetime | None = None) -> str:
        rss = ET.Element("rss", version="2.0")
        channel = ET.SubElement(rss, "channel")
        ET.SubElement(channel, "title").text = CHANNEL_TITLE
        ET.SubElement(channel, "link").text = CHANNEL_LINK
        ET.SubElement(channel, "description").text = CHANNEL_DESCRIPTION
        ET.SubElement(channel, "language").text = "en-us"
        ET.SubElement(channel, "lastBuildDate").text = rfc822(now or datetime.now(UTC))

        for post in self._posts:
            item = ET.SubElement(channel, "item")
            ET.SubElement(item, "title").text = post.title
            ET.SubElement(item, "link").text = post.link
            ET.SubElement(item, "description").text = post.description
            if post.image_url:
                ET.SubElement(item, "enclosure", url=post.image_url, type=post.image_type or "")
            ET.SubElement(item, "pubDate").text = rfc822(post.pub_date)

        ET.indent(rss)
        body = ET.tostring(rss, encoding="unicode")
        return '<?xml version="1.0" encoding="UTF-8" ?>\n' + body
