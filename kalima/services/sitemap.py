"""
sitemap.xml generation
"""

import logging
from typing import Iterable, Optional
from xml.sax.saxutils import escape

from pydantic import BaseModel

from kalima.models.article import Article
from kalima.models.language import SUPPORTED_LANGUAGES
from kalima.models.static_page import StaticPage
from kalima.services.taxonomy import Taxonomy, taxonomy as default_taxonomy

logger = logging.getLogger(__name__)

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"


class SitemapUrl(BaseModel):
    loc: str
    lastmod: Optional[str] = None
    changefreq: Optional[str] = None
    priority: Optional[float] = None


def article_urls(base_url: str, article: Article) -> list[SitemapUrl]:
    """One legacy URL plus one prefixed URL per available language"""
    lastmod = article.created_at.isoformat() if article.created_at else None
    urls = [SitemapUrl(
        loc=f"{base_url}/article/{article.slug}",
        lastmod=lastmod,
        changefreq="monthly",
        priority=0.8,
    )]
    for code in article.available_languages:
        translation = article.translations.get(code)
        if translation is not None and translation.category and translation.subcategory:
            loc = f"{base_url}/{code}/categories/{translation.category}/{translation.subcategory}/{article.slug}"
        else:
            loc = f"{base_url}/{code}/article/{article.slug}"
        urls.append(SitemapUrl(loc=loc, lastmod=lastmod, changefreq="monthly", priority=0.8))
    return urls


def collect_urls(
    base_url: str,
    static_pages: Iterable[StaticPage],
    articles: Iterable[Article],
    taxonomy: Taxonomy = default_taxonomy,
) -> list[SitemapUrl]:
    base_url = base_url.rstrip("/")
    urls = [SitemapUrl(loc=base_url, changefreq="daily", priority=1.0)]
    urls.extend(
        SitemapUrl(loc=f"{base_url}/{code}", changefreq="daily", priority=0.9)
        for code in SUPPORTED_LANGUAGES
    )
    urls.extend([
        SitemapUrl(loc=f"{base_url}/categories", changefreq="weekly", priority=0.9),
        SitemapUrl(loc=f"{base_url}/search", changefreq="monthly", priority=0.6),
        SitemapUrl(loc=f"{base_url}/login", changefreq="yearly", priority=0.3),
        SitemapUrl(loc=f"{base_url}/register", changefreq="yearly", priority=0.3),
    ])

    for page in static_pages:
        if page.draft:
            continue
        urls.append(SitemapUrl(loc=f"{base_url}/page/{page.slug}", changefreq="monthly", priority=0.7))

    prefixes = [""] + [f"/{code}" for code in SUPPORTED_LANGUAGES]
    for category in taxonomy.all_categories():
        for prefix in prefixes:
            urls.append(SitemapUrl(
                loc=f"{base_url}{prefix}/categories/{category.slug}", changefreq="weekly", priority=0.8))
            urls.extend(
                SitemapUrl(
                    loc=f"{base_url}{prefix}/categories/{category.slug}/{sub.slug}",
                    changefreq="weekly",
                    priority=0.7,
                )
                for sub in category.subcategories
            )

    for article in articles:
        if article.draft or not article.slug:
            continue
        urls.extend(article_urls(base_url, article))

    unique = []
    seen = set()
    for url in urls:
        if url.loc in seen:
            continue
        seen.add(url.loc)
        unique.append(url)
    return unique


def _render_url(url: SitemapUrl) -> str:
    lines = ["  <url>", f"    <loc>{escape(url.loc)}</loc>"]
    if url.lastmod:
        lines.append(f"    <lastmod>{escape(url.lastmod)}</lastmod>")
    if url.changefreq:
        lines.append(f"    <changefreq>{url.changefreq}</changefreq>")
    if url.priority is not None:
        lines.append(f"    <priority>{url.priority:.1f}</priority>")
    lines.append("  </url>")
    return "\n".join(lines)


def generate_sitemap(
    base_url: str,
    static_pages: Iterable[StaticPage],
    articles: Iterable[Article],
    taxonomy: Taxonomy = default_taxonomy,
) -> str:
    """
    Render the sitemap for the public URL surface.

    Args:
        base_url: site origin, e.g. https://kalima.online
        static_pages: published static pages
        articles: articles; drafts are skipped

    Returns:
        sitemap XML document
    """
    urls = collect_urls(base_url, static_pages, articles, taxonomy)
    logger.debug(f"Sitemap generated with {len(urls)} URLs")
    body = "\n".join(_render_url(url) for url in urls)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<urlset xmlns="{SITEMAP_NAMESPACE}">\n'
        f"{body}\n"
        "</urlset>\n"
    )
