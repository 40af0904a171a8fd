"""
Topic Routes
============

REST endpoints for reading, writing, deleting and counting topics.

Version: 0.1.0
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from shared.database.errors import ConstraintViolationError, GraphStoreError
from shared.logging import get_logger

from services.topics_rw.models.topic import TopicDecodeError, decode_topic
from services.topics_rw.services.topic_store import TopicStore


logger = get_logger(__name__)

router = APIRouter()


def get_topic_store(request: Request) -> TopicStore:
    """Dependency that provides the store created at startup."""
    return request.app.state.topic_store


def _unavailable(operation: str, uuid: str | None, e: GraphStoreError) -> HTTPException:
    logger.error(
        f"{operation}_failed",
        uuid=uuid,
        error=str(e),
        error_type=type(e).__name__,
    )
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=str(e),
    )


# Declared before /{uuid} so it is not captured as a uuid
@router.get("/__count")
async def count_topics(store: TopicStore = Depends(get_topic_store)) -> int:
    """Number of topics stored."""
    try:
        return await store.count()
    except GraphStoreError as e:
        raise _unavailable("count_topics", None, e)


@router.get("/{uuid}")
async def read_topic(
    uuid: str,
    store: TopicStore = Depends(get_topic_store),
) -> dict:
    """Fetch one topic by UUID."""
    try:
        topic, found = await store.read(uuid)
    except GraphStoreError as e:
        raise _unavailable("read_topic", uuid, e)

    if not found:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Topic with uuid {uuid} not found",
        )
    return topic.to_payload()


@router.put("/{uuid}")
async def write_topic(
    uuid: str,
    request: Request,
    store: TopicStore = Depends(get_topic_store),
) -> dict:
    """
    Create or replace a topic.

    The body must be a Topic whose uuid matches the path.
    """
    try:
        topic = decode_topic(await request.body())
    except TopicDecodeError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid topic payload: {e}",
        )

    if topic.uuid != uuid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Uuids from payload ({topic.uuid}) and request ({uuid}) do not match",
        )

    try:
        await store.write(topic)
    except ConstraintViolationError as e:
        logger.warning("write_topic_conflict", uuid=uuid, error=str(e))
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except GraphStoreError as e:
        raise _unavailable("write_topic", uuid, e)

    return {"success": True, "uuid": uuid}


@router.delete("/{uuid}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_topic(
    uuid: str,
    store: TopicStore = Depends(get_topic_store),
) -> Response:
    """Delete a topic and its identifiers."""
    try:
        deleted = await store.delete(uuid)
    except GraphStoreError as e:
        raise _unavailable("delete_topic", uuid, e)

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Topic with uuid {uuid} not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
