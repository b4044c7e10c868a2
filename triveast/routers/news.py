# triveast/routers/news.py

import logging
import secrets

from fastapi import APIRouter, Depends, File, Form, Header, Response, UploadFile, status

from triveast.config import Settings
from triveast.deps import get_feed, get_images, get_settings
from triveast.errors import Unauthorized, http_error
from triveast.rss import ImageStore, ImageTooLarge, RssFeed, StoredImage
from triveast.schemas import ErrorCode, RssPostResponse

router = APIRouter(tags=["news"])
logger = logging.getLogger("triveast.news")


@router.get("/rss.xml")
def rss_xml(feed: RssFeed = Depends(get_feed)):
    return Response(content=feed.render(), media_type="application/xml")


async def _store_image(image: UploadFile, images: ImageStore) -> StoredImage:
    # one byte past the limit is enough to know it is too large
    data = await image.read(images.max_bytes + 1)
    try:
        return images.save(image.filename or "", image.content_type, data)
    except ImageTooLarge as e:
        raise http_error(
            ErrorCode.VALIDATION_ERROR,
            str(e),
            http_status=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            hint="image",
        ) from e
    except ValueError as e:
        raise http_error(ErrorCode.VALIDATION_ERROR, str(e), hint="image") from e
    finally:
        await image.close()


@router.post("/api/rss/add", response_model=RssPostResponse)
async def add_post(
    title: str = Form(..., min_length=1, max_length=200),
    description: str = Form(..., min_length=1, max_length=5000),
    link: str | None = Form(None),
    image: UploadFile | None = File(None),
    x_admin_token: str | None = Header(None),
    settings: Settings = Depends(get_settings),
    feed: RssFeed = Depends(get_feed),
    images: ImageStore = Depends(get_images),
):
    """
    Append a post from a multipart form (title, description, link?, image?).

    Requires X-Admin-Token when TRIVEAST_ADMIN_TOKEN is set. The optional image is
    stored in the uploads directory and becomes the item's <enclosure>.
    """
    if settings.admin_token and not (
        x_admin_token and secrets.compare_digest(x_admin_token, settings.admin_token)
    ):
        raise Unauthorized("Unauthorized")

    stored = await _store_image(image, images) if image is not None and image.filename else None
    try:
        feed.add_post(title, description, link, stored)
    except ValueError as e:
        if stored is not None:
            images.discard(stored)
        raise http_error(ErrorCode.VALIDATION_ERROR, str(e)) from e
    logger.info("rss post added", extra={"outcome": "image" if stored else "text"})
    return RssPostResponse()
