"""Search API routes"""

import logging
from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect

from kalima.config import settings
from kalima.dependencies import get_request_language
from kalima.models.language import DEFAULT_LANGUAGE, Language, parse_language
from kalima.schemas.article import ArticleListResponse
from kalima.schemas.view import ViewState
from kalima.services.content_query import content_query_service
from kalima.services.presenters import localize_articles
from kalima.services.search_debouncer import SearchDebouncer
from kalima.services.translator import t

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/search", tags=["Search"])


async def _search(text: str, language: Language) -> ArticleListResponse:
    articles = await content_query_service.search(text, language)
    localized = localize_articles(articles, language)
    return ArticleListResponse(
        articles=localized,
        total=len(localized),
        state=ViewState.READY.value if localized else ViewState.EMPTY.value,
    )


@router.get("/", response_model=ArticleListResponse)
async def search_articles(
    q: str = Query("", description="Case-insensitive text to look for"),
    language: Language = Depends(get_request_language),
):
    """
    Search published articles in the request language only

    Queries shorter than the minimum length return an empty result.
    """
    return await _search(q, language)


def _socket_language(websocket: WebSocket) -> Language:
    return (
        parse_language(websocket.query_params.get("lang"))
        or parse_language(websocket.cookies.get(settings.LANGUAGE_COOKIE_NAME))
        or DEFAULT_LANGUAGE
    )


@router.websocket("/ws")
async def quick_search(websocket: WebSocket):
    """
    Search-as-you-type

    The client sends {"q": "..."} on every keystroke; the server evaluates
    only after a quiet interval and sends results only for the latest query.
    """
    await websocket.accept()
    language = _socket_language(websocket)

    async def evaluate(text: str) -> ArticleListResponse:
        return await _search(text, language)

    async def deliver(text: str, result: ArticleListResponse) -> None:
        payload = result.model_dump(by_alias=True)
        payload["query"] = text
        if len(text.strip()) < settings.SEARCH_MIN_QUERY_LENGTH:
            payload["message"] = t("search.enterSearchTerm", language)
        elif not result.articles:
            payload["message"] = t("search.noResults", language)
        await websocket.send_json(payload)

    async def report(text: str, error: Exception) -> None:
        await websocket.send_json({"query": text, "state": ViewState.ERROR.value, "message": t("error.generic", language)})

    debouncer = SearchDebouncer(evaluate, deliver, on_error=report)
    try:
        while True:
            message = await websocket.receive_json()
            text = message.get("q", "") if isinstance(message, dict) else str(message)
            debouncer.submit(text)
    except WebSocketDisconnect:
        logger.debug("Quick search client disconnected")
    finally:
        await debouncer.aclose()
