from kalima.models.article import Article, ArticleTranslation, ContentEntity, ContentSection
from kalima.models.category import Category, Subcategory
from kalima.models.language import Language
from kalima.models.static_page import PageTranslation, StaticPage
from kalima.models.user import SuggestedArticle, UserProfile

__all__ = [
    "Article",
    "ArticleTranslation",
    "ContentEntity",
    "ContentSection",
    "Category",
    "Subcategory",
    "Language",
    "PageTranslation",
    "StaticPage",
    "SuggestedArticle",
    "UserProfile",
]
