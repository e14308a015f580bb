"""
Prometheus metrics for Content Service.

Tracks publication, comment and image lifecycle operations and domain
rejections.
"""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest

publications_total = Counter(
    "content_publications_total",
    "Publication lifecycle operations",
    ["operation"],
)

comments_total = Counter(
    "content_comments_total",
    "Comment lifecycle operations",
    ["operation"],
)

images_total = Counter(
    "content_images_total",
    "Publication image operations",
    ["operation"],
)

domain_rejections_total = Counter(
    "content_domain_rejections_total",
    "Operations rejected by business rules",
    ["code"],
)


def track_publication(operation: str) -> None:
    publications_total.labels(operation=operation).inc()


def track_comment(operation: str) -> None:
    comments_total.labels(operation=operation).inc()


def track_image(operation: str) -> None:
    images_total.labels(operation=operation).inc()


def track_rejection(code: str) -> None:
    domain_rejections_total.labels(code=code).inc()


async def metrics_endpoint() -> Response:
    """Expose metrics in Prometheus text format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
