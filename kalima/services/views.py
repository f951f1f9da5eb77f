"""
View dispatcher for the public URL surface.

A path is resolved to a language, matched against the route table, gated,
then handed to the handler for its route. Every outcome, including
failures, is a ViewResponse with an explicit state; nothing here raises
for a missing entity or an unreachable store.
"""

import logging
from typing import Any, Optional, Union
from urllib.parse import parse_qs

from pydantic import BaseModel

from kalima.api.route_table import Capability, RouteMatch, RouteTable, build_route_table
from kalima.config import settings
from kalima.exceptions import ContentNotFoundError, FetchFailureError
from kalima.models.language import Language
from kalima.models.user import UserProfile
from kalima.schemas.view import ViewResponse, ViewState
from kalima.services.content_query import ArticleFilter, ContentQueryService, content_query_service, matches_taxonomy
from kalima.services.favorites import favorites_of, suggestions_of
from kalima.services.language_router import LanguageRoute, canonical_path, localized_path, resolve_path
from kalima.services.presenters import localize_article, localize_articles, localize_page
from kalima.services.taxonomy import Taxonomy, taxonomy as default_taxonomy
from kalima.services.translator import t

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
RELATED_ARTICLES_LIMIT = 3

NOT_FOUND_MESSAGES = {
    "article": "article.notFound",
    "page": "page.notFound",
    "category": "error.categoryNotFound",
    "subcategory": "error.subcategoryNotFound",
}


class ViewContext(BaseModel):
    """Everything a handler needs about the current request"""

    language: Language
    route: LanguageRoute
    match: RouteMatch
    query: dict[str, str] = {}
    user: Optional[UserProfile] = None

    def link(self, path: str) -> str:
        """`path` in the same URL style (prefixed or not) as the request"""
        if not self.route.is_language_in_path:
            return path
        return localized_path(path, self.language)


class ViewResult(BaseModel):
    state: ViewState
    data: Any = None
    message: Optional[str] = None
    redirect_to: Optional[str] = None


def _query_params(path: str) -> dict[str, str]:
    _, _, query = path.partition("?")
    return {key: values[0] for key, values in parse_qs(query).items() if values}


class ViewService:
    def __init__(
        self,
        route_table: Optional[RouteTable] = None,
        query_service: Optional[ContentQueryService] = None,
        taxonomy: Taxonomy = default_taxonomy,
    ):
        self.route_table = route_table or build_route_table()
        self.query_service = query_service or content_query_service
        self.taxonomy = taxonomy
        self._handlers = {
            "home": self._home,
            "categories": self._categories,
            "category": self._category,
            "subcategory": self._subcategory,
            "category_article": self._category_article,
            "article": self._article,
            "page": self._page,
            "search": self._search,
            "favorites": self._favorites,
            "profile": self._profile,
            "suggestions": self._suggestions,
            "login": self._auth_form,
            "register": self._auth_form,
            "admin": self._admin,
        }

    async def render(
        self,
        path: str,
        user: Optional[UserProfile] = None,
        preferred_language: Union[Language, str, None] = None,
    ) -> ViewResponse:
        """
        Build the view payload for a request path.

        Args:
            path: path as typed by the reader, optionally with a query string
            user: signed-in profile, if any
            preferred_language: persisted choice used when the path has no
                language segment

        Returns:
            ViewResponse; `canonicalPath`/`rewritten` tell the client which
            history entry to replace, never to navigate
        """
        path = path or "/"
        route = resolve_path(path, preferred_language)
        canonical, rewritten = canonical_path(path, preferred_language)
        language = route.active_language

        response = ViewResponse(
            state=ViewState.LOADING,
            language=language.value,
            direction=language.direction,
            path_without_language=route.path_without_language,
            is_language_in_path=route.is_language_in_path,
            canonical_path=canonical,
            rewritten=rewritten,
        )

        match = self.route_table.match(route.path_without_language, route.is_language_in_path)
        if match is None:
            response.state = ViewState.NOT_FOUND
            response.message = t("error.notFound", language)
            response.back_link = localized_path("/", language) if route.is_language_in_path else "/"
            return response

        response.route = match.route.name
        response.params = match.params

        if match.route.capability == Capability.AUTHENTICATED and user is None:
            logger.debug(f"Redirecting anonymous request for {path} to {LOGIN_PATH}")
            response.state = ViewState.REDIRECT
            response.redirect_to = LOGIN_PATH
            return response

        context = ViewContext(
            language=language,
            route=route,
            match=match,
            query=_query_params(path),
            user=user,
        )
        handler = self._handlers[match.route.name]
        try:
            result = await handler(context)
        except ContentNotFoundError as e:
            response.state = ViewState.NOT_FOUND
            response.message = t(NOT_FOUND_MESSAGES.get(e.kind, "error.notFound"), language)
            response.back_link = context.link(e.parent_path)
            return response
        except FetchFailureError as e:
            logger.error(f"View '{match.route.name}' failed for {path}: {e}")
            response.state = ViewState.ERROR
            response.message = t("error.generic", language)
            return response

        response.state = result.state
        response.data = result.data
        response.message = result.message
        response.redirect_to = result.redirect_to
        return response

    # ============================================
    # HANDLERS
    # ============================================

    async def _home(self, ctx: ViewContext) -> ViewResult:
        articles = await self.query_service.query(ArticleFilter(language=ctx.language.value, draft=False))
        localized = localize_articles(articles, ctx.language)
        data = {
            "articles": [a.model_dump(by_alias=True) for a in localized],
            "categories": [c.model_dump() for c in self.taxonomy.localized_tree(ctx.language)],
        }
        if not localized:
            return ViewResult(state=ViewState.EMPTY, data=data, message=t("article.noArticles", ctx.language))
        return ViewResult(state=ViewState.READY, data=data)

    async def _categories(self, ctx: ViewContext) -> ViewResult:
        tree = self.taxonomy.localized_tree(ctx.language)
        return ViewResult(state=ViewState.READY, data={"categories": [c.model_dump() for c in tree]})

    def _require_category(self, slug: str):
        category = self.taxonomy.category_by_slug(slug)
        if category is None:
            raise ContentNotFoundError("category", slug, parent_path="/categories")
        return category

    def _require_subcategory(self, category_slug: str, subcategory_slug: str):
        category = self._require_category(category_slug)
        subcategory = category.subcategory(subcategory_slug)
        if subcategory is None:
            raise ContentNotFoundError(
                "subcategory", subcategory_slug, parent_path=f"/categories/{category_slug}")
        return category, subcategory

    async def _category(self, ctx: ViewContext) -> ViewResult:
        category = self._require_category(ctx.match.params["cat"])
        return ViewResult(
            state=ViewState.READY,
            data={"category": self.taxonomy.localize(category, ctx.language).model_dump()},
        )

    async def _subcategory(self, ctx: ViewContext) -> ViewResult:
        cat, sub = ctx.match.params["cat"], ctx.match.params["sub"]
        category, subcategory = self._require_subcategory(cat, sub)
        articles = await self.query_service.query(ArticleFilter(
            category=cat, subcategory=sub, language=ctx.language.value, draft=False))
        localized = localize_articles(articles, ctx.language)
        data = {
            "category": {"slug": category.slug, "name": self.taxonomy.category_name(category.slug, ctx.language)},
            "subcategory": {
                "slug": subcategory.slug,
                "name": self.taxonomy.subcategory_name(subcategory.slug, ctx.language),
            },
            "articles": [a.model_dump(by_alias=True) for a in localized],
        }
        if not localized:
            return ViewResult(state=ViewState.EMPTY, data=data, message=t("article.noArticles", ctx.language))
        return ViewResult(state=ViewState.READY, data=data)

    async def _published_article(self, slug: str, parent_path: str):
        article = await self.query_service.get_article_by_slug(slug)
        if article is None or article.draft:
            raise ContentNotFoundError("article", slug, parent_path=parent_path)
        return article

    async def _article_result(self, ctx: ViewContext, article, related_category: Optional[str]) -> ViewResult:
        localized = localize_article(article, ctx.language)
        if localized is None:
            raise ContentNotFoundError("article", article.slug, parent_path="/")

        related = []
        if related_category:
            candidates = await self.query_service.query(ArticleFilter(
                category=related_category, language=ctx.language.value, draft=False))
            related = localize_articles(
                [c for c in candidates if c.id != article.id][:RELATED_ARTICLES_LIMIT], ctx.language)

        favorite = ctx.user is not None and article.id in ctx.user.favorites
        return ViewResult(state=ViewState.READY, data={
            "article": localized.model_dump(by_alias=True),
            "related": [r.model_dump(by_alias=True) for r in related],
            "isFavorite": favorite,
        })

    async def _category_article(self, ctx: ViewContext) -> ViewResult:
        cat, sub = ctx.match.params["cat"], ctx.match.params["sub"]
        self._require_subcategory(cat, sub)
        parent = f"/categories/{cat}/{sub}"
        article = await self._published_article(ctx.match.params["slug"], parent)
        if not matches_taxonomy(article, cat, sub):
            raise ContentNotFoundError("article", article.slug, parent_path=parent)
        return await self._article_result(ctx, article, cat)

    async def _article(self, ctx: ViewContext) -> ViewResult:
        article = await self._published_article(ctx.match.params["slug"], "/")
        localized = localize_article(article, ctx.language)
        return await self._article_result(ctx, article, localized.category if localized else None)

    async def _page(self, ctx: ViewContext) -> ViewResult:
        slug = ctx.match.params["slug"]
        page = await self.query_service.get_static_page_by_slug(slug)
        if page is None or page.draft:
            raise ContentNotFoundError("page", slug, parent_path="/")
        localized = localize_page(page, ctx.language)
        if localized is None:
            raise ContentNotFoundError("page", slug, parent_path="/")
        return ViewResult(state=ViewState.READY, data={"page": localized.model_dump(by_alias=True)})

    async def _search(self, ctx: ViewContext) -> ViewResult:
        text = (ctx.query.get("q") or "").strip()
        if len(text) < settings.SEARCH_MIN_QUERY_LENGTH:
            return ViewResult(
                state=ViewState.EMPTY,
                data={"query": text, "articles": []},
                message=t("search.enterSearchTerm", ctx.language),
            )
        results = localize_articles(await self.query_service.search(text, ctx.language), ctx.language)
        data = {"query": text, "articles": [a.model_dump(by_alias=True) for a in results]}
        if not results:
            return ViewResult(state=ViewState.EMPTY, data=data, message=t("search.noResults", ctx.language))
        return ViewResult(state=ViewState.READY, data=data)

    async def _favorites(self, ctx: ViewContext) -> ViewResult:
        profile = ctx.user
        entities = await self.query_service.get_articles_by_ids(profile.favorites if profile else [])
        view = favorites_of(profile, entities)
        localized = localize_articles(view.articles, ctx.language)
        data = {"articles": [a.model_dump(by_alias=True) for a in localized]}
        if view.state == ViewState.EMPTY:
            return ViewResult(state=view.state, data=data, message=t("favorites.empty", ctx.language))
        return ViewResult(state=view.state, data=data)

    async def _profile(self, ctx: ViewContext) -> ViewResult:
        return ViewResult(state=ViewState.READY, data={"profile": ctx.user.model_dump(by_alias=True)})

    async def _suggestions(self, ctx: ViewContext) -> ViewResult:
        suggestions = [s.model_dump() for s in suggestions_of(ctx.user)]
        if not suggestions:
            return ViewResult(
                state=ViewState.EMPTY,
                data={"suggestions": []},
                message=t("suggestions.empty", ctx.language),
            )
        return ViewResult(state=ViewState.READY, data={"suggestions": suggestions})

    async def _auth_form(self, ctx: ViewContext) -> ViewResult:
        return ViewResult(state=ViewState.READY)

    async def _admin(self, ctx: ViewContext) -> ViewResult:
        # Signed in is enough to reach the dashboard; the admin API checks isAdmin
        if not ctx.user.is_admin:
            return ViewResult(state=ViewState.ERROR, message=t("error.unauthorized", ctx.language))
        section = ctx.match.params.get("rest", "").strip("/")
        return ViewResult(state=ViewState.READY, data={"section": section or "dashboard"})


view_service = ViewService()
