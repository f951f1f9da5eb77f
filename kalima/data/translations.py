"""
UI string table, flattened to "section.key" per language.

English is the reference table: every key the service looks up must exist
there. Other languages may lag behind and fall back to English at lookup.
"""

from typing import Dict

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        "general.appName": "Kalima Online",
        "general.backToHome": "Back to Home",
        "general.backToCategories": "Back to Categories",
        "general.loading": "Loading...",
        "nav.home": "Home",
        "nav.categories": "Categories",
        "nav.favorites": "Favorites",
        "nav.profile": "Profile",
        "nav.suggestions": "Suggestions",
        "nav.admin": "Admin",
        "categories.allCategories": "All Categories",
        "categories.language-learning": "Language Learning",
        "categories.culture": "Culture",
        "categories.science": "Science",
        "categories.stories": "Stories",
        "categories.tips-lifestyle": "Tips & Lifestyle",
        "subcategories.vocabulary": "Vocabulary",
        "subcategories.grammar": "Grammar",
        "subcategories.phrases": "Phrases",
        "subcategories.history": "History",
        "subcategories.food": "Food",
        "subcategories.travel": "Travel",
        "subcategories.nature": "Nature",
        "subcategories.technology": "Technology",
        "subcategories.health": "Health",
        "subcategories.short-stories": "Short Stories",
        "subcategories.fairy-tales": "Fairy Tales",
        "subcategories.productivity": "Productivity",
        "subcategories.study-tips": "Study Tips",
        "subcategories.motivation": "Motivation",
        "article.notFound": "Article not found",
        "article.noArticles": "No articles found",
        "page.notFound": "Page not found",
        "search.noResults": "No results found",
        "search.enterSearchTerm": "Enter at least 2 characters to search",
        "favorites.empty": "You have no favorite articles yet",
        "suggestions.empty": "You have not suggested any articles yet",
        "error.title": "Error",
        "error.generic": "Something went wrong",
        "error.notFound": "Page not found",
        "error.categoryNotFound": "Category not found",
        "error.subcategoryNotFound": "Subcategory not found",
        "error.unauthorized": "Unauthorized access",
        "error.savingFailed": "Failed to save changes",
    },
    "ar": {
        "general.appName": "كلمة أونلاين",
        "general.backToHome": "العودة إلى الرئيسية",
        "general.backToCategories": "العودة إلى التصنيفات",
        "nav.home": "الرئيسية",
        "nav.categories": "التصنيفات",
        "nav.favorites": "المفضلة",
        "nav.profile": "الملف الشخصي",
        "categories.allCategories": "جميع التصنيفات",
        "categories.language-learning": "تعلم اللغات",
        "categories.culture": "الثقافة",
        "categories.science": "العلوم",
        "categories.stories": "قصص",
        "categories.tips-lifestyle": "نصائح ونمط الحياة",
        "subcategories.vocabulary": "المفردات",
        "subcategories.grammar": "القواعد",
        "subcategories.phrases": "العبارات",
        "subcategories.history": "التاريخ",
        "subcategories.food": "الطعام",
        "subcategories.travel": "السفر",
        "subcategories.nature": "الطبيعة",
        "subcategories.technology": "التكنولوجيا",
        "subcategories.health": "الصحة",
        "subcategories.short-stories": "قصص قصيرة",
        "subcategories.fairy-tales": "حكايات خرافية",
        "subcategories.productivity": "الإنتاجية",
        "subcategories.study-tips": "نصائح للدراسة",
        "subcategories.motivation": "التحفيز",
        "error.title": "خطأ",
        "error.generic": "حدث خطأ ما",
        "error.notFound": "الصفحة غير موجودة",
        "error.unauthorized": "وصول غير مصرح به",
        "error.savingFailed": "فشل حفظ التغييرات",
    },
    "fr": {
        "general.appName": "Kalima Online",
        "general.backToHome": "Retour à l'accueil",
        "general.backToCategories": "Retour aux catégories",
        "nav.home": "Accueil",
        "nav.categories": "Catégories",
        "nav.favorites": "Favoris",
        "nav.profile": "Profil",
        "categories.allCategories": "Toutes les catégories",
        "categories.language-learning": "Apprentissage des langues",
        "categories.culture": "Culture",
        "categories.science": "Science",
        "categories.stories": "Histoires",
        "categories.tips-lifestyle": "Conseils et mode de vie",
        "subcategories.vocabulary": "Vocabulaire",
        "subcategories.grammar": "Grammaire",
        "subcategories.phrases": "Phrases",
        "subcategories.history": "Histoire",
        "subcategories.food": "Cuisine",
        "subcategories.travel": "Voyage",
        "subcategories.nature": "Nature",
        "subcategories.technology": "Technologie",
        "subcategories.health": "Santé",
        "subcategories.short-stories": "Nouvelles",
        "subcategories.fairy-tales": "Contes de fées",
        "subcategories.productivity": "Productivité",
        "subcategories.study-tips": "Conseils d'étude",
        "subcategories.motivation": "Motivation",
        "error.title": "Erreur",
        "error.generic": "Quelque chose s'est mal passé",
        "error.notFound": "Page non trouvée",
        "error.unauthorized": "Accès non autorisé",
        "error.savingFailed": "Échec de l'enregistrement des modifications",
    },
    "es": {
        "general.appName": "Kalima Online",
        "general.backToHome": "Volver al inicio",
        "general.backToCategories": "Volver a las categorías",
        "nav.home": "Inicio",
        "nav.categories": "Categorías",
        "nav.favorites": "Favoritos",
        "nav.profile": "Perfil",
        "categories.allCategories": "Todas las categorías",
        "categories.language-learning": "Aprendizaje de idiomas",
        "categories.culture": "Cultura",
        "categories.science": "Ciencia",
        "categories.stories": "Cuentos",
        "categories.tips-lifestyle": "Consejos y estilo de vida",
        "subcategories.vocabulary": "Vocabulario",
        "subcategories.grammar": "Gramática",
        "subcategories.phrases": "Frases",
        "subcategories.history": "Historia",
        "subcategories.food": "Comida",
        "subcategories.travel": "Viajes",
        "subcategories.nature": "Naturaleza",
        "subcategories.technology": "Tecnología",
        "subcategories.health": "Salud",
        "subcategories.short-stories": "Cuentos cortos",
        "subcategories.fairy-tales": "Cuentos de hadas",
        "subcategories.productivity": "Productividad",
        "subcategories.study-tips": "Consejos de estudio",
        "subcategories.motivation": "Motivación",
        "error.title": "Error",
        "error.generic": "Algo salió mal",
        "error.notFound": "Página no encontrada",
        "error.unauthorized": "Acceso no autorizado",
        "error.savingFailed": "Error al guardar cambios",
    },
    "de": {
        "general.appName": "Kalima Online",
        "general.backToHome": "Zurück zur Startseite",
        "general.backToCategories": "Zurück zu den Kategorien",
        "nav.home": "Startseite",
        "nav.categories": "Kategorien",
        "nav.favorites": "Favoriten",
        "nav.profile": "Profil",
        "categories.allCategories": "Alle Kategorien",
        "categories.language-learning": "Sprachenlernen",
        "categories.culture": "Kultur",
        "categories.science": "Wissenschaft",
        "categories.stories": "Geschichten",
        "categories.tips-lifestyle": "Tipps & Lebensstil",
        "subcategories.vocabulary": "Vokabular",
        "subcategories.grammar": "Grammatik",
        "subcategories.phrases": "Redewendungen",
        "subcategories.history": "Geschichte",
        "subcategories.food": "Essen",
        "subcategories.travel": "Reisen",
        "subcategories.nature": "Natur",
        "subcategories.technology": "Technologie",
        "subcategories.health": "Gesundheit",
        "subcategories.short-stories": "Kurzgeschichten",
        "subcategories.fairy-tales": "Märchen",
        "subcategories.productivity": "Produktivität",
        "subcategories.study-tips": "Studientipps",
        "subcategories.motivation": "Motivation",
        "error.title": "Fehler",
        "error.generic": "Etwas ist schief gelaufen",
        "error.notFound": "Seite nicht gefunden",
        "error.unauthorized": "Unbefugter Zugriff",
        "error.savingFailed": "Speichern der Änderungen fehlgeschlagen",
    },
}
