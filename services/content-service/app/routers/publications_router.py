"""
Publication API router.

CRUD, search and image attachment endpoints for publications. Paged
listings report the total number of matches in the ``X-TotalCount``
header.
"""

import os
from typing import List, Optional

import structlog
from fastapi import (
    APIRouter,
    Depends,
    File,
    HTTPException,
    Query,
    Response,
    UploadFile,
    status,
)

from ..config import settings
from ..dependencies import get_publication_service
from ..domain.entities import Ordering
from ..services.publication_service import PublicationService
from .schemas import (
    CreatePublicationRequest,
    ImageResponse,
    PublicationResponse,
    UpdatePublicationRequest,
    raise_domain_error,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1/publications", tags=["publications"])

TOTAL_COUNT_HEADER = "X-TotalCount"


async def _get_or_404(service: PublicationService, publication_id: str):
    publication = await service.get_by_id(publication_id)
    if publication is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Publication not found"
        )
    return publication


@router.get(
    "",
    response_model=List[PublicationResponse],
    summary="Search publications",
)
async def search_publications(
    response: Response,
    skip: int = Query(0, ge=0),
    take: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    tags: Optional[List[str]] = Query(None, description="Match any of these tags"),
    order: Ordering = Query(Ordering.ASC),
    service: PublicationService = Depends(get_publication_service),
):
    """Page through publications ordered by creation time."""
    publications, total = await service.search(skip, take, tags, order)
    response.headers[TOTAL_COUNT_HEADER] = str(total)
    return [PublicationResponse.from_entity(p) for p in publications]


@router.get(
    "/by-author/{author_id}",
    response_model=List[PublicationResponse],
    summary="Search publications of an author",
)
async def search_publications_by_author(
    author_id: str,
    response: Response,
    skip: int = Query(0, ge=0),
    take: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    order: Ordering = Query(Ordering.ASC),
    service: PublicationService = Depends(get_publication_service),
):
    publications, total = await service.search_by_author(skip, take, author_id, order)
    response.headers[TOTAL_COUNT_HEADER] = str(total)
    return [PublicationResponse.from_entity(p) for p in publications]


@router.get("/{publication_id}", response_model=PublicationResponse)
async def get_publication(
    publication_id: str,
    service: PublicationService = Depends(get_publication_service),
):
    publication = await _get_or_404(service, publication_id)
    return PublicationResponse.from_entity(publication)


@router.post(
    "",
    response_model=PublicationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create publication",
)
async def create_publication(
    request: CreatePublicationRequest,
    service: PublicationService = Depends(get_publication_service),
):
    """
    Create a publication.

    Hashtags in the content become the publication's tags.
    """
    result = await service.create(request.content, request.author_id)
    if not result.successed:
        raise_domain_error(result.error)

    publication = await _get_or_404(service, result.value)
    return PublicationResponse.from_entity(publication)


@router.put("/{publication_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_publication(
    publication_id: str,
    request: UpdatePublicationRequest,
    service: PublicationService = Depends(get_publication_service),
):
    result = await service.update(publication_id, request.content)
    if not result.successed:
        raise_domain_error(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{publication_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_publication(
    publication_id: str,
    service: PublicationService = Depends(get_publication_service),
):
    """Delete a publication together with its image and comments."""
    await _get_or_404(service, publication_id)
    await service.delete(publication_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/{publication_id}/image",
    response_model=ImageResponse,
    summary="Attach image",
)
async def attach_image(
    publication_id: str,
    file: UploadFile = File(...),
    service: PublicationService = Depends(get_publication_service),
):
    """
    Upload an image for a publication.

    Returns 409 when the publication already has an image.
    """
    _, extension = os.path.splitext(file.filename or "")
    logger.debug(
        "Image upload received",
        publication_id=publication_id,
        filename=file.filename,
        content_type=file.content_type,
    )
    try:
        result = await service.attach_image(publication_id, file.file, extension)
    finally:
        await file.close()

    if not result.successed:
        raise_domain_error(result.error)
    return ImageResponse(images_url=result.value)


@router.delete("/{publication_id}/image", status_code=status.HTTP_204_NO_CONTENT)
async def detach_image(
    publication_id: str,
    service: PublicationService = Depends(get_publication_service),
):
    await _get_or_404(service, publication_id)
    await service.detach_image(publication_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
