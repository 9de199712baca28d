"""Utility endpoints used by admin content forms.

Provides:
- POST /utilities/slugs to preview the slug generated for a title
- POST /utilities/filenames to preview how an upload will be stored
"""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import Field, ValidationError

from recyclehub.core.exceptions import BadRequestError
from recyclehub.observability.logging import get_logger
from recyclehub.schemas.base import APIRequest, APIResponse
from recyclehub.schemas.response import SuccessResponse
from recyclehub.utils.slugify import (
    SlugOptions,
    generate_seo_path,
    sanitize_filename,
    slugify,
)


logger = get_logger(__name__)

router = APIRouter(prefix="/utilities", tags=["Utilities"])


class SlugPreviewRequest(APIRequest):
    """Text to slugify plus optional overrides of the default policy."""

    text: str = Field(..., max_length=1000)
    lowercase: bool | None = None
    separator: str | None = None
    max_length: int | None = None
    remove_special_chars: bool | None = None
    seo: bool = Field(default=False, description="Apply the SEO length limit")

    def to_options(self) -> SlugOptions:
        """Build options from the explicitly supplied overrides only."""
        overrides = self.model_dump(
            include={"lowercase", "separator", "max_length", "remove_special_chars"},
            exclude_none=True,
            by_alias=False,
        )
        return SlugOptions(**overrides)


class SlugPreviewResponse(APIResponse):
    """Generated slug."""

    slug: str


class FilenamePreviewRequest(APIRequest):
    """Filename to sanitize."""

    filename: str = Field(..., max_length=255)
    separator: str = "-"


class FilenamePreviewResponse(APIResponse):
    """Sanitized filename."""

    filename: str


def _invalid_options(exc: ValidationError) -> BadRequestError:
    messages = "; ".join(
        f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    )
    return BadRequestError(f"Invalid slug options: {messages}")


@router.post(
    "/slugs",
    response_model=SuccessResponse[SlugPreviewResponse],
    summary="Preview a slug",
)
async def preview_slug(
    body: SlugPreviewRequest,
) -> SuccessResponse[SlugPreviewResponse]:
    """Slugify text with the default, SEO or overridden policy."""
    try:
        options = body.to_options()
    except ValidationError as exc:
        raise _invalid_options(exc) from exc

    if body.seo:
        slug = generate_seo_path(body.text, options)
    else:
        slug = slugify(body.text, options)
    logger.debug("Generated slug preview", slug=slug, seo=body.seo)
    return SuccessResponse[SlugPreviewResponse](data=SlugPreviewResponse(slug=slug))


@router.post(
    "/filenames",
    response_model=SuccessResponse[FilenamePreviewResponse],
    summary="Preview a sanitized filename",
)
async def preview_filename(
    body: FilenamePreviewRequest,
) -> SuccessResponse[FilenamePreviewResponse]:
    """Sanitize an upload filename for storage."""
    try:
        filename = sanitize_filename(body.filename, body.separator)
    except ValidationError as exc:
        raise _invalid_options(exc) from exc

    return SuccessResponse[FilenamePreviewResponse](
        data=FilenamePreviewResponse(filename=filename)
    )
